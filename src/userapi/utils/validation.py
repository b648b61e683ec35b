"""
Request validation dependencies.

`validate(target, schema)` builds a FastAPI dependency that pulls raw input
from one part of the request, checks it against a pydantic model and either
raises a 400 RequestError carrying a field-level error tree or stores the
parsed model on `request.state.validated` and returns it.
"""

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Type, TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError

from userapi.utils.error_handling import RequestError, error_tree

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ValidationTarget(str, Enum):
    QUERY = "query"
    PARAMS = "params"
    JSON = "json"


@dataclass
class ValidatedRequest:
    """Per-request slots for validated input, one per target"""
    query: Optional[BaseModel] = None
    params: Optional[BaseModel] = None
    json: Optional[BaseModel] = None


def get_validated(request: Request) -> ValidatedRequest:
    validated = getattr(request.state, "validated", None)
    if validated is None:
        validated = ValidatedRequest()
        request.state.validated = validated
    return validated


async def read_json_body(request: Request) -> Any:
    """Parse the request body as JSON, or raise 415"""
    body = await request.body()
    if not body:
        raise RequestError(415, "Request body is required.")

    content_type = request.headers.get("content-type", "")
    if "application/json" not in content_type.lower():
        raise RequestError(415, "Request body must be JSON")

    try:
        return json.loads(body)
    except ValueError:
        raise RequestError(415, "Request body must be JSON")


async def extract_input(request: Request, target: ValidationTarget) -> Any:
    if target == ValidationTarget.JSON:
        return await read_json_body(request)
    elif target == ValidationTarget.PARAMS:
        return dict(request.path_params)
    elif target == ValidationTarget.QUERY:
        return dict(request.query_params)

    logger.error(f"Invalid validation target: {target}")
    raise RequestError(500, "Internal server configuration error")


def validate(target: ValidationTarget, schema: Type[ModelT]) -> Callable:
    """Dependency factory: validate one request target against `schema`"""

    async def dependency(request: Request) -> ModelT:
        raw = await extract_input(request, target)

        try:
            result = schema.model_validate(raw)
        except ValidationError as e:
            details = error_tree(e.errors())
            logger.warning(f"Validation Error ({target.value}): {details}")
            raise RequestError(400, f"{target.value.capitalize()} Validation Failed", details=details)

        validated = get_validated(request)
        if target == ValidationTarget.JSON:
            validated.json = result
        elif target == ValidationTarget.PARAMS:
            validated.params = result
        else:
            validated.query = result

        return result

    return dependency
