"""
src/services/errors.py
──────────────────────
Errors raised at the service boundary. Each carries the HTTP status the API
layer answers with.
"""
from __future__ import annotations


class ServiceError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequestError(ServiceError):
    status_code = 400


class InvalidTelemetryError(InvalidRequestError):
    pass


class NotAuthenticatedError(ServiceError):
    status_code = 401


class VehicleNotFoundError(ServiceError):
    status_code = 404
