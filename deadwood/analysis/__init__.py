"""Graph, reachability and chain analysis."""

from deadwood.analysis.chain_tracer import ChainTracer
from deadwood.analysis.classifier import classify
from deadwood.analysis.dead_code import detect_dead_code, explain_unreachable
from deadwood.analysis.dependency_graph import DependencyGraphBuilder, build_reverse_index
from deadwood.analysis.reachability import find_reachable
from deadwood.analysis.resolver import ModuleResolver

__all__ = [
    "ChainTracer",
    "DependencyGraphBuilder",
    "ModuleResolver",
    "build_reverse_index",
    "classify",
    "detect_dead_code",
    "explain_unreachable",
    "find_reachable",
]
