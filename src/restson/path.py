r"""Path resolution for REST resource types.

A resource type maps typed parameters to the REST path that is appended to
the client base URL. One path function is declared per parameter type, and
the function is selected by the type of the parameters given at the call
site.

Example:
    ```pycon
    >>> from dataclasses import dataclass
    >>> from restson.path import RestPath, rest_path
    >>> @dataclass
    ... class Device(RestPath):
    ...     name: str
    ...     @rest_path(None)
    ...     def _all(cls, _: None) -> str:
    ...         return "api/devices"
    ...     @rest_path(int)
    ...     def _by_id(cls, device_id: int) -> str:
    ...         return f"api/devices/{device_id}"
    ...
    >>> Device.get_path(None)
    'api/devices'
    >>> Device.get_path(1234)
    'api/devices/1234'

    ```
"""

from __future__ import annotations

__all__ = ["RestPath", "rest_path", "resolve_path"]

from collections.abc import Callable
from typing import Any, ClassVar

from restson.exceptions import UrlError

PATH_PARAM_ATTR = "__rest_path_param__"


def rest_path(param_type: type | None) -> Callable[[Callable[..., str]], classmethod]:
    r"""Declare the path function of a resource for one parameter type.

    The decorated function receives the resource class and the parameters,
    and returns the REST path. It may raise ``UrlError`` to reject
    parameter values.

    Args:
        param_type: The parameter type handled by the function. ``None``
            stands for calls without parameters.

    Returns:
        A decorator turning the function into a registered classmethod.
    """
    if param_type is None:
        param_type = type(None)

    def decorator(func: Callable[..., str]) -> classmethod:
        setattr(func, PATH_PARAM_ATTR, param_type)
        return classmethod(func)

    return decorator


class RestPath:
    r"""Base class for request-able resource types.

    Subclasses declare their path functions with ``rest_path``. The
    declarations are collected per class when the class is created and are
    inherited by subclasses, which may add or replace entries.
    Subclasses may instead override ``get_path`` directly.
    """

    _path_functions: ClassVar[dict[type, Callable[..., str]]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        table = dict(cls._path_functions)
        for attr in vars(cls).values():
            func = getattr(attr, "__func__", None)
            param_type = getattr(func, PATH_PARAM_ATTR, None)
            if param_type is not None:
                table[param_type] = func
        cls._path_functions = table

    @classmethod
    def get_path(cls, params: Any) -> str:
        r"""Build the REST path of this resource for the given parameters.

        The path function registered for the most specific type in the
        parameters' MRO is used.

        Args:
            params: The path parameters.

        Returns:
            The REST path, e.g. ``"api/devices/1234"``.

        Raises:
            UrlError: If no path function accepts the parameter type.
        """
        for klass in type(params).__mro__:
            func = cls._path_functions.get(klass)
            if func is not None:
                return func(cls, params)
        msg = f"{cls.__name__} has no REST path for parameters of type {type(params).__name__}"
        raise UrlError(msg)


def resolve_path(resource_type: type, params: Any) -> str:
    r"""Resolve the REST path of a resource type.

    Args:
        resource_type: The resource type. Any class with a ``get_path``
            classmethod is accepted.
        params: The path parameters.

    Returns:
        The REST path.

    Raises:
        UrlError: If the type has no ``get_path``, the path function
            rejects the parameters, or the result is not a string.
    """
    get_path = getattr(resource_type, "get_path", None)
    if get_path is None:
        msg = f"{getattr(resource_type, '__name__', resource_type)!r} is not a REST resource type"
        raise UrlError(msg)
    path = get_path(params)
    if not isinstance(path, str):
        msg = f"REST path must be a string, got {type(path).__name__}"
        raise UrlError(msg)
    return path
