"""
Health and operational API endpoints
"""

import time
from datetime import datetime
from typing import Any, Dict

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from insurance_api.core.config import config
from insurance_api.core.logger import logger
from insurance_api.db.mongodb import get_database

router = APIRouter()

# Track service start time
start_time = time.time()


@router.get("/health")
def health_check(request: Request):
    """Basic health check endpoint"""
    return {
        "status": "healthy",
        "service": config.service_name,
        "timestamp": datetime.now().isoformat(),
        "version": config.api_version,
    }


@router.get("/health/ready")
async def readiness_check(request: Request):
    """Readiness probe - check if service is ready to serve traffic"""
    check = await check_database_health()
    
    if check["status"] == "healthy":
        return {
            "status": "ready",
            "service": config.service_name,
            "timestamp": datetime.now().isoformat(),
            "checks": [check],
        }
    
    logger.warning(
        "Readiness check failed - database unavailable",
        metadata={"event": "readiness_check_failed", "error": check.get("error")}
    )
    return JSONResponse(
        status_code=503,
        content={
            "status": "not ready",
            "service": config.service_name,
            "timestamp": datetime.now().isoformat(),
            "checks": [check],
        },
    )


@router.get("/health/live")
def liveness_check(request: Request):
    """Liveness probe - check if the app is running"""
    return {
        "status": "alive",
        "service": config.service_name,
        "timestamp": datetime.now().isoformat(),
        "uptime": time.time() - start_time,
    }


async def check_database_health() -> Dict[str, Any]:
    """Check MongoDB database connectivity"""
    check_start = time.time()
    
    try:
        database = await get_database()
        await database.command('ping')
        
        response_time_ms = (time.time() - check_start) * 1000
        
        logger.debug(
            "Database health check passed",
            metadata={
                "response_time_ms": response_time_ms,
                "database": config.mongodb_database,
                "event": "health_check_database_success"
            }
        )
        
        return {
            "name": "database",
            "status": "healthy",
            "response_time_ms": round(response_time_ms, 2),
            "database": config.mongodb_database,
            "timestamp": datetime.now().isoformat(),
        }
        
    except Exception as e:
        response_time_ms = (time.time() - check_start) * 1000
        error_msg = str(e)
        
        logger.error(
            f"Database health check failed: {error_msg}",
            metadata={
                "response_time_ms": response_time_ms,
                "database_host": config.mongodb_host,
                "event": "health_check_database_failed"
            }
        )
        
        return {
            "name": "database",
            "status": "unhealthy",
            "error": error_msg,
            "response_time_ms": round(response_time_ms, 2),
            "timestamp": datetime.now().isoformat(),
        }
