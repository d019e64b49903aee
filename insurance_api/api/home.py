"""
Home/Root API endpoints
Service information and welcome endpoints
"""

import time
from datetime import datetime

from fastapi import APIRouter, Request

from insurance_api.api.health import start_time
from insurance_api.core.config import config

router = APIRouter()


@router.get("/")
async def root():
    """
    Root endpoint - Service information.
    """
    return {
        "service": config.service_name,
        "version": config.service_version,
        "environment": config.environment,
        "message": "Insurance Product Service is running",
        "status": "operational"
    }


@router.get("/version")
def get_version(request: Request):
    """
    Get service version information.
    """
    return {
        "version": config.service_version,
    }


@router.get("/info")
def get_service_info(request: Request):
    """
    Get service information for discovery and debugging.
    """
    return {
        "service": config.service_name,
        "version": config.service_version,
        "api_version": config.api_version,
        "environment": config.environment,
        "uptime_seconds": round(time.time() - start_time, 2),
        "configuration": {
            "log_level": config.log_level,
            "product_collection": config.product_collection,
        },
        "timestamp": datetime.now().isoformat(),
    }
