"""
Extractor - Orchestrates one extraction call

Pipeline (a linear LangGraph state graph):
1. matcher:               primary regex pass per field
2. overlap_resolver:      trim lower-priority spans that collide with higher ones
3. fallback:              looser second pass for empty/weak fields
4. confidence_aggregator: single 0..1 score
5. formatter:             final ExtractionResult

extract_fields() is the only public entry point and never raises: any
internal failure produces ExtractionResult.empty().
"""

import logging
from typing import Any, Optional

from langgraph.graph import StateGraph, START, END

from state import ExtractionState, ExtractionResult, FIELD_NAMES
from nodes.matcher import match_all_fields
from nodes.overlap import resolve_overlaps
from nodes.fallback import fill_gaps
from nodes.confidence import aggregate_confidence

logger = logging.getLogger(__name__)


# ============================================================================
# Graph Nodes
# ============================================================================

def matcher_node(state: ExtractionState) -> dict:
    text = state["text"]
    if not isinstance(text, str):
        raise TypeError(f"text must be a string, got {type(text).__name__}")
    return {"fields": match_all_fields(text)}


def overlap_resolver_node(state: ExtractionState) -> dict:
    fields, trimmed_count = resolve_overlaps(state["fields"], state["text"])
    return {"fields": fields, "trimmed_count": trimmed_count}


def fallback_node(state: ExtractionState) -> dict:
    return {"fields": fill_gaps(state["text"], state["fields"])}


def confidence_aggregator_node(state: ExtractionState) -> dict:
    confidence = aggregate_confidence(state["fields"], state.get("trimmed_count", 0))
    return {"confidence": confidence}


def formatter_node(state: ExtractionState) -> dict:
    """Flatten the field set into the public result shape."""
    fields = state["fields"]
    result = ExtractionResult(
        address=fields["address"].value,
        buyer=fields["buyer"].value,
        seller=fields["seller"].value,
        date=fields["date"].value,
        confidence=state["confidence"],
        spans={name: fields[name].as_span() for name in FIELD_NAMES},
    )
    return {"result": result}


# ============================================================================
# Graph Construction
# ============================================================================

def build_extraction_graph():
    """
    Constructs the extraction state machine.

    The graph is linear; every node always runs.
    """
    builder = StateGraph(ExtractionState)

    builder.add_node("matcher", matcher_node)
    builder.add_node("overlap_resolver", overlap_resolver_node)
    builder.add_node("fallback", fallback_node)
    builder.add_node("confidence_aggregator", confidence_aggregator_node)
    builder.add_node("formatter", formatter_node)

    builder.add_edge(START, "matcher")
    builder.add_edge("matcher", "overlap_resolver")
    builder.add_edge("overlap_resolver", "fallback")
    builder.add_edge("fallback", "confidence_aggregator")
    builder.add_edge("confidence_aggregator", "formatter")
    builder.add_edge("formatter", END)

    return builder.compile()


# Compiled once; holds no per-call state
_graph: Optional[Any] = None


def get_extraction_graph():
    global _graph
    if _graph is None:
        _graph = build_extraction_graph()
    return _graph


# ============================================================================
# Public API
# ============================================================================

def extract_fields(text: str) -> ExtractionResult:
    """
    Extract address, buyer, seller and date from a free-text sentence.

    Args:
        text: Input sentence or short paragraph

    Returns:
        ExtractionResult. On any internal failure the canonical empty result
        (all fields "", confidence 0.0, all spans None) is returned instead of
        raising.
    """
    try:
        final_state = get_extraction_graph().invoke({"text": text})
        result = final_state.get("result")
        if result is None:
            raise RuntimeError("extraction graph finished without a result")
        return result
    except Exception:
        logger.exception("Extraction failed, returning empty result")
        return ExtractionResult.empty()
