from imgds.monitoring.logging import JsonFormatter, configure_logging, log_context

__all__ = ["JsonFormatter", "configure_logging", "log_context"]
