"""
OpenTelemetry Instrumentation for FastAPI

Creates spans for incoming requests and MongoDB operations.
Export is configured through the standard OTEL_* environment variables.
"""

from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.pymongo import PymongoInstrumentor

from insurance_api.core.config import config
from insurance_api.core.logger import logger


def instrument_app(app) -> bool:
    """
    Instrument FastAPI application with OpenTelemetry for automatic span creation.
    
    Args:
        app: FastAPI application instance
        
    Returns:
        True when instrumentation was applied
    """
    if not config.otel_enabled:
        logger.info("OpenTelemetry instrumentation disabled")
        return False
    
    try:
        FastAPIInstrumentor.instrument_app(app)
        logger.info("FastAPI instrumented with OpenTelemetry")
        
        PymongoInstrumentor().instrument()
        logger.info("PyMongo instrumented with OpenTelemetry")
        
        return True
        
    except Exception as e:
        logger.error(f"Failed to instrument application: {e}", error=e)
        return False
