"""
Response helper utilities for turning stored records into response models
"""
from typing import Any, Dict, List, Sequence
from pydantic import BaseModel


def record_to_dict(obj: Any) -> Any:
    """
    Dump a stored record to plain python data (snake_case keys); dicts pass through
    """
    if isinstance(obj, BaseModel):
        return obj.model_dump()
    return obj


def safe_model_validate(model_class: type[BaseModel], data: Any) -> BaseModel:
    """
    Validate a stored record (or dict) into a response model
    """
    return model_class.model_validate(record_to_dict(data))


def safe_model_validate_list(model_class: type[BaseModel], data_list: Sequence[Any]) -> List[BaseModel]:
    return [safe_model_validate(model_class, item) for item in data_list]


def user_to_dict(user) -> Dict[str, Any]:
    """Convert a User record to a dict without the password"""
    return {
        'id': user.id,
        'username': user.username,
        'name': user.name,
        'email': user.email,
        'phone': user.phone,
        'address': user.address,
        'city': user.city,
        'pincode': user.pincode,
        'role': user.role,
    }


def clean_validation_errors(errors: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Keep the JSON-safe part of pydantic/FastAPI validation errors
    """
    cleaned = []
    for error in errors:
        cleaned.append({
            'loc': [str(part) for part in error.get('loc', ())],
            'msg': str(error.get('msg', '')),
            'type': str(error.get('type', '')),
        })
    return cleaned
