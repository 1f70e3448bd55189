from .measure_time import MeasureTime, Tracer, set_thread_name
from .log_config import configure_logging

__all__ = ['MeasureTime', 'Tracer', 'set_thread_name', 'configure_logging']
