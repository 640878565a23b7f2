"""Composable async operation pipelines: sequential, parallel, result-aware and AI-backed ops."""

__version__ = "0.1.0"

__all__ = ["agent_ops", "one_or_many", "op", "parallel", "pipeline", "try_op"]