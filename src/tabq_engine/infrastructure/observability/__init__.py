from tabq_engine.infrastructure.observability.context import LogContext, create_logger_context
from tabq_engine.infrastructure.observability.logger import EngineLogger, NullLogger

__all__ = ["EngineLogger", "LogContext", "NullLogger", "create_logger_context"]
