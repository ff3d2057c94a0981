from taxocluster.aggregation.store import AggregationStore

__all__ = ["AggregationStore"]
