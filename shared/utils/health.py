"""
Health check utilities for The Light content services.
Provides health monitoring and status reporting.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional

from shared.app_logging.logger import get_logger
from shared.utils.redis_client import RedisClient

logger = get_logger(__name__)


class HealthStatus(Enum):
    """Health status enumeration."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    DEGRADED = "degraded"
    UNKNOWN = "unknown"


@dataclass
class HealthCheck:
    """Individual health check result."""

    name: str
    status: HealthStatus
    message: str
    response_time_ms: Optional[float] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: datetime = None

    def __post_init__(self):
        if self.timestamp is None:
            self.timestamp = datetime.now(timezone.utc)


class HealthChecker:
    """Health checker for a service and its dependencies."""

    def __init__(self, service_name: str):
        self.service_name = service_name
        self.logger = get_logger(f"{service_name}.health")
        self.checks: List[Callable[[], Awaitable[HealthCheck]]] = []

    def add_check(self, check_func: Callable[[], Awaitable[HealthCheck]]):
        """Add a health check coroutine function."""
        self.checks.append(check_func)

    def redis_check(self, redis_client: RedisClient) -> Callable[[], Awaitable[HealthCheck]]:
        """Build a Redis connectivity check bound to ``redis_client``."""

        async def check_redis() -> HealthCheck:
            start_time = datetime.now()
            ok = await redis_client.ping()
            response_time = (datetime.now() - start_time).total_seconds() * 1000
            if ok:
                return HealthCheck(
                    name="redis",
                    status=HealthStatus.HEALTHY,
                    message="Redis connection successful",
                    response_time_ms=response_time,
                )
            return HealthCheck(
                name="redis",
                status=HealthStatus.UNHEALTHY,
                message="Redis connection failed",
                response_time_ms=response_time,
            )

        return check_redis

    async def run_all_checks(self) -> Dict[str, Any]:
        """Run all registered health checks."""
        results = []
        overall_status = HealthStatus.HEALTHY

        for check_func in self.checks:
            try:
                result = await check_func()
                results.append(result)

                if result.status == HealthStatus.UNHEALTHY:
                    overall_status = HealthStatus.UNHEALTHY
                elif (
                    result.status == HealthStatus.DEGRADED
                    and overall_status == HealthStatus.HEALTHY
                ):
                    overall_status = HealthStatus.DEGRADED

            except Exception as e:
                self.logger.error(f"Health check {check_func.__name__} raised: {e}")
                results.append(
                    HealthCheck(
                        name=check_func.__name__,
                        status=HealthStatus.UNHEALTHY,
                        message=f"Health check failed with exception: {str(e)}",
                    )
                )
                overall_status = HealthStatus.UNHEALTHY

        return {
            "service": self.service_name,
            "status": overall_status.value,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "checks": [
                {
                    "name": check.name,
                    "status": check.status.value,
                    "message": check.message,
                    "response_time_ms": check.response_time_ms,
                    "details": check.details,
                    "timestamp": check.timestamp.isoformat(),
                }
                for check in results
            ],
        }

    async def readiness(self, critical: List[str]) -> Dict[str, Any]:
        """Summarize the status of the critical dependencies only."""
        health_data = await self.run_all_checks()
        critical_checks = [
            check for check in health_data["checks"] if check["name"] in critical
        ]
        all_critical_healthy = all(
            check["status"] == "healthy" for check in critical_checks
        )
        return {
            "status": "ready" if all_critical_healthy else "not_ready",
            "service": self.service_name,
            "critical_dependencies": {
                check["name"]: check["status"] for check in critical_checks
            },
        }


def create_content_health_checker(redis_client: RedisClient) -> HealthChecker:
    """Create health checker for the content service."""
    checker = HealthChecker("content")
    checker.add_check(checker.redis_check(redis_client))
    return checker
