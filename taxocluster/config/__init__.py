from taxocluster.config.settings import Settings, CYCLE_POLICIES

__all__ = ["Settings", "CYCLE_POLICIES"]
