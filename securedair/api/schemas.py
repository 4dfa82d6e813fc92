"""
Request schemas and the validation decorator that enforces them.

Invalid input is rejected with 400 and one message per failing field:
    {"error": "Invalid data", "details": [{"message": "tier is ..."}]}
"""

from functools import wraps
from typing import Optional, Type

from flask import g, jsonify, request
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from securedair.access import Tier


class CountryParams(BaseModel):
    country: str = Field(min_length=1)


class RoutePairParams(BaseModel):
    source_country: str = Field(min_length=1)
    destination_country: str = Field(min_length=1)


class TierParams(BaseModel):
    tier: Tier


class TokenCreateRequest(BaseModel):
    tier: Tier


class TokenVerifyRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    token: Optional[str] = None
    # Parsed by the credential manager; an unknown tier raises InvalidTier
    required_tier: Optional[str] = Field(default=None, alias='requiredTier')


def _request_data(source: str) -> dict:
    if source == 'params':
        return dict(request.view_args or {})
    if source == 'query':
        return request.args.to_dict()
    return request.get_json(silent=True) or {}


def validate_data(schema: Type[BaseModel], source: str = 'body'):
    """
    Validate request data against a pydantic schema.

    The parsed model is stored on flask.g.validated for the view.

    Args:
        schema: pydantic model to validate with.
        source: 'body' (JSON), 'params' (URL variables) or 'query'.
    """
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                g.validated = schema.model_validate(_request_data(source))
            except ValidationError as e:
                details = [
                    {'message': f"{'.'.join(str(p) for p in err['loc'])} is {err['msg']}"}
                    for err in e.errors()
                ]
                return jsonify({'error': 'Invalid data', 'details': details}), 400
            return view(*args, **kwargs)
        return wrapper
    return decorator
