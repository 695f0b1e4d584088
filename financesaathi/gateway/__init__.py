"""
API Gateway Module

Centralized gateway layer that handles middleware, rate limiting, router
registration and health probes. The gateway is the single entry point for
all API requests.
"""
from .gateway import APIGateway

__all__ = ["APIGateway"]
