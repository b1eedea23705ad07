"""
Explanation Client Factory

Factory for creating explanation client instances.
"""

import importlib
from typing import Dict, List, Type, Union

from .base import ExplanationClient


# Registry of available clients: "module.Class" paths are imported lazily,
# classes registered at runtime are stored directly
_CLIENT_REGISTRY: Dict[str, Union[str, Type[ExplanationClient]]] = {
    "groq": "groq_client.GroqClient",
    "offline": "offline_client.OfflineClient",
}

# Cache for loaded client classes
_CLIENT_CACHE: Dict[str, Type[ExplanationClient]] = {}


def _load_client_class(client_type: str) -> Type[ExplanationClient]:
    """Lazily load a client class by type."""
    if client_type in _CLIENT_CACHE:
        return _CLIENT_CACHE[client_type]

    entry = _CLIENT_REGISTRY[client_type]
    if isinstance(entry, str):
        module_name, class_name = entry.rsplit(".", 1)
        module = importlib.import_module(f".{module_name}", package=__package__)
        client_class = getattr(module, class_name)
    else:
        client_class = entry

    _CLIENT_CACHE[client_type] = client_class
    return client_class


def create_client(client_type: str = "groq", **config) -> ExplanationClient:
    """
    Create an explanation client by type.

    Args:
        client_type: Client type identifier. Available types:
            - "groq" (default): Groq hosted model over HTTP
            - "offline": local template explanations
        **config: Client-specific constructor options:
            For "groq":
                - api_key, model, timeout, base_url, http_client

    Returns:
        Configured ExplanationClient instance

    Raises:
        ValueError: If client_type is not recognized
        MissingApiKeyError: If a networked client has no credentials

    Example:
        client = create_client("groq", model="deepseek-r1-distill-llama-70b")
        text = client.generate(movement, "es")
    """
    if client_type not in _CLIENT_REGISTRY:
        available = ", ".join(_CLIENT_REGISTRY.keys())
        raise ValueError(f"Unknown client type: {client_type}. Available: {available}")

    client_class = _load_client_class(client_type)
    return client_class(**config)


def register_client(name: str, client_class: type) -> None:
    """
    Register a custom explanation client type.

    Args:
        name: Client type identifier
        client_class: ExplanationClient subclass

    Example:
        from src.explain import register_client, ExplanationClient

        class MyClient(ExplanationClient):
            ...

        register_client("mine", MyClient)
    """
    if not isinstance(client_class, type) or not issubclass(client_class, ExplanationClient):
        raise TypeError(f"{client_class} must be a subclass of ExplanationClient")
    _CLIENT_REGISTRY[name] = client_class
    _CLIENT_CACHE.pop(name, None)


def available_clients() -> List[str]:
    """
    List available client types.

    Returns:
        List of registered client type names
    """
    return list(_CLIENT_REGISTRY.keys())
