"""FastAPI middleware and error handlers for RFC7807-compliant Problem responses.

For details on the Problem format, see: https://tools.ietf.org/html/rfc7807
"""

import inspect
import json
import logging
from typing import (Any, Awaitable, Callable, Dict, Mapping, Optional,
                    Sequence, Union)

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.openapi.utils import get_openapi
from starlette.exceptions import HTTPException
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from . import schema
from .builder import ProblemBuilder
from .exceptions import ProblemException
from .problem import CONTENT_TYPE, STANDARD_MEMBERS, Problem

logger = logging.getLogger(__name__)

PreHook = Callable[[Request, Exception], Union[Any, Awaitable[Any]]]
PostHook = Callable[[Request, Response, Exception], Union[Any, Awaitable[Any]]]


class ProblemResponse(Response):
    """A Response for RFC7807 Problems."""

    media_type: str = CONTENT_TYPE

    def __init__(self, *args, debug: bool = False, **kwargs) -> None:
        self.debug: bool = debug
        self.problem_headers: Dict[str, str] = {}
        super(ProblemResponse, self).__init__(*args, **kwargs)

    def init_headers(self, headers: Optional[Mapping[str, str]] = None) -> None:
        h = dict(headers) if headers else {}
        h.update(self.problem_headers)

        super(ProblemResponse, self).init_headers(h)

    def render(self, content: Any) -> bytes:
        """Render the provided content as an RFC-7807 Problem JSON-serialized bytes."""
        if isinstance(content, Problem):
            p = content
        elif isinstance(content, ProblemException):
            p = content.problem
            self.problem_headers = dict(content.headers)
        elif isinstance(content, dict):
            p = from_dict(content)
        elif isinstance(content, HTTPException):
            p = from_http_exception(content)
            if getattr(content, 'headers', None):
                self.problem_headers = dict(content.headers)
        elif isinstance(content, RequestValidationError):
            p = from_request_validation_error(content)
        elif isinstance(content, Exception):
            p = from_exception(content)
        else:
            p = from_content(content)

        # Dynamically set the response status_code to match
        # the status code of the Problem.
        self.status_code = response_status(p)

        self.problem = p
        return to_bytes(p, debug=self.debug)


def response_status(problem: Problem) -> int:
    """Get the HTTP status code to respond with for a Problem.

    Problems without a valid HTTP status code are sent as 500 Internal Server Error.
    """
    if 100 <= problem.status <= 599:
        return problem.status
    return 500


def to_bytes(problem: Problem, debug: bool = False) -> bytes:
    """Render the Problem as JSON-serialized bytes.

    Extension values which are not JSON-serializable are serialized as strings.

    Args:
        problem: The Problem to serialize.
        debug: Pretty-print the JSON, making it easier for humans to read
            while debugging.

    Returns:
        The JSON-serialized bytes representing the Problem response.
    """
    if debug:
        return json.dumps(
            problem.to_dict(),
            ensure_ascii=False,
            allow_nan=False,
            indent=2,
            default=str,
        ).encode('utf-8')
    else:
        return json.dumps(
            problem.to_dict(),
            ensure_ascii=False,
            allow_nan=False,
            indent=None,
            separators=(',', ':'),
            default=str,
        ).encode('utf-8')


def from_dict(data: Dict[str, Any]) -> Problem:
    """Create a new Problem instance from a dictionary.

    The RFC7807 members of the dictionary populate the corresponding Problem
    fields. If the dictionary does not contain them, defaults are used where
    appropriate (e.g. status code 500), and all other dictionary members are
    added to the Problem as extensions.

    If the type or instance is not a valid URI, or the status is not an
    integer, the dictionary can not be represented as a Problem and it is
    treated as unexpected content instead (see from_content).

    Args:
        data: The dictionary to convert into a Problem.

    Returns:
        A new Problem instance populated from the dictionary fields.
    """
    try:
        return ProblemBuilder() \
            .type(data.get('type') or None) \
            .title(data.get('title') or None) \
            .status(data.get('status') or 500) \
            .detail(data.get('detail')) \
            .instance(data.get('instance') or None) \
            .extensions({k: v for k, v in data.items() if k not in STANDARD_MEMBERS}) \
            .build()
    except (TypeError, ValueError) as e:
        logger.debug('unable to convert dict to problem: %s', e)
        return from_content(data)


def from_content(content: Any) -> Problem:
    """Create a new Problem instance for content which is not a recognized error.

    The Problem is a 500 "Application Error", with the str() form of the
    content included as the 'content' extension.

    Args:
        content: The unexpected content.

    Returns:
        A new Problem instance describing the unexpected content.
    """
    return ProblemBuilder() \
        .status(500) \
        .title('Application Error') \
        .detail('Got unexpected content when trying to generate error response') \
        .extension('content', str(content)) \
        .build()


def from_http_exception(exc: HTTPException) -> Problem:
    """Create a new Problem instance from an HTTPException.

    The Problem will take on the status code of the HTTPException and generate
    a title based on that status code. If the HTTPException specifies any details,
    those will be used as the problem details.

    Args:
        exc: The HTTPException to convert into a Problem.

    Returns:
        A new Problem instance populated from the HTTPException.
    """
    builder = ProblemBuilder().status(exc.status_code)
    if isinstance(exc.detail, str):
        builder.detail(exc.detail)
    elif exc.detail is not None:
        builder.extension('errors', exc.detail)
    return builder.build()


def from_request_validation_error(exc: RequestValidationError) -> Problem:
    """Create a new Problem instance from a RequestValidationError.

    The Problem will take on a status code of 400 Bad Request, indicating that
    the user provided data which the server will not process. The title will
    be "Validation Error". The specifics of which fields failed validation
    checks are included as additional Problem context.

    Args:
        exc: The RequestValidationError to convert into a Problem.

    Returns:
         A new Problem instance populated from the RequestValidationError.
    """
    return ProblemBuilder() \
        .title('Validation Error') \
        .status(400) \
        .detail('One or more user-provided parameters are invalid') \
        .extension('errors', list(exc.errors())) \
        .build()


def from_exception(exc: Exception) -> Problem:
    """Create a new Problem instance from a broad-class Exception.

    Converting a general Exception into a Problem is indicative of a server
    error, where some exception is not handled explicitly or not wrapped in
    a ProblemException/HTTPException.

    When creating a Problem from Exception, the Problem will always use the
    500 Server Error status code, however instead of "Internal Server Error"
    as the title, "Unexpected Server Error" is used to indicate that an
    exception was not properly wrapped/raised.

    The exception class is provided as additional Problem context, and the
    exception message is used as Problem details.

    Args:
        exc: The general Exception to convert into a Problem.

    Returns:
        A new Problem instance populated from the Exception.
    """
    return ProblemBuilder() \
        .title('Unexpected Server Error') \
        .status(500) \
        .detail(str(exc)) \
        .extension('exc_type', exc.__class__.__name__) \
        .build()


def get_exception_handler(
        debug: bool = False,
        pre_hooks: Optional[Sequence[PreHook]] = None,
        post_hooks: Optional[Sequence[PostHook]] = None,
) -> Callable:
    """A custom FastAPI exception handler constructor.

    The exception handler which this returns is used to return an RFC7807
    compliant ProblemResponse for the given exception.

    The constructor function lets you specify whether the application is running
    in debug mode, which will cause the error JSON to be pretty-printed for
    easier readability. Otherwise, the JSON response is serialized in a more
    compact format.

    Hooks can be specified for the handler as well. Pre-hooks run before the
    exception is converted into a ProblemResponse and take a request
    (starlette.requests.Request) and an Exception as arguments. Post-hooks run
    after the response is generated and additionally take the response. Errors
    raised by a hook are propagated to the caller. Hooks can be used to add
    additional logging around exception handling, to collect application
    metrics for error counts, or for any other reason deemed suitable.

    Args:
        debug: Configure the handler for pretty-printing response JSON.
        pre_hooks: Functions which are run before generating a response.
        post_hooks: Functions which are run after generating a response.
    """
    async def exception_handler(request: Request, exc: Exception) -> ProblemResponse:
        nonlocal debug, pre_hooks, post_hooks

        await exec_hooks(pre_hooks, request, exc)
        response = ProblemResponse(exc, debug=debug)
        logger.debug(
            'converted %s to problem response for %s: %s',
            exc.__class__.__name__, request.scope.get('path'), response.problem,
        )
        await exec_hooks(post_hooks, request, response, exc)

        return response
    return exception_handler


async def exec_hooks(hooks: Optional[Sequence[Union[PreHook, PostHook]]], *args) -> None:
    """Helper function to execute hooks, if any are defined.

    Args:
        hooks: The hooks, if any, to execute.
        args: Positional arguments to pass to the hooks.
    """
    if hooks:
        for hook in hooks:
            if inspect.iscoroutinefunction(hook):
                await hook(*args)
            else:
                hook(*args)


def register(
    app: FastAPI,
    pre_hooks: Optional[Sequence[PreHook]] = None,
    post_hooks: Optional[Sequence[PostHook]] = None,
    add_schema: Union[str, bool] = False,
) -> None:
    """Register the RFC7807 middleware with a FastAPI application instance.

    This function registers:

    1. An exception handler for HTTPExceptions. This ensures that any HTTPException
       raised by the application is properly converted to an RFC7807 Problem response.
    2. An exception handler for RequestValidationError. This ensures that any validation
       errors (e.g. incorrect params) are formatted into an RFC7807 Problem response.
    3. An exception handler for ProblemException, responding with the wrapped Problem.
    4. ProblemMiddleware. This middleware handles all other exceptions raised by the
       application and converts them to RFC7807 Problem responses.

    The ProblemMiddleware captures all exceptions before they reach starlette's
    internal default ServerErrorMiddleware. As such, all errors are returned as
    JSON, and debug tracebacks for errors are no longer displayed in HTML.

    If the FastAPI application is configured for debug mode, this will
    pretty-print the JSON output, making it more human-readable and easier
    to debug. Otherwise, the JSON response is serialized in a more compact
    format.

    This can also add the Problem schema to the application's OpenAPI schema
    components, so that it can be referenced with the application/problem+json
    content type:

        @app.get(
            path='/',
            responses={
                500: {
                    'content': {'application/problem+json': {
                        'schema': {
                            '$ref': '#/components/schemas/Problem',
                        },
                    }},
                }
            }
        )
        def root():
            ...

    Args:
        app: The FastAPI application instance to register with.
        pre_hooks: Functions which are run before generating a response.
        post_hooks: Functions which are run after generating a response.
        add_schema: Add the Problem pydantic model as a schema to the application's
            OpenAPI definitions. If this is a string, it will be added to the
            schema using the string as the name.
    """
    _handler = get_exception_handler(debug=app.debug, pre_hooks=pre_hooks, post_hooks=post_hooks)

    app.add_exception_handler(HTTPException, _handler)
    app.add_exception_handler(RequestValidationError, _handler)
    app.add_exception_handler(ProblemException, _handler)
    app.add_middleware(ProblemMiddleware, debug=app.debug, pre_hooks=pre_hooks, post_hooks=post_hooks)

    if add_schema:
        if isinstance(add_schema, str):
            name = add_schema
        else:
            name = 'Problem'

        # Override the built-in OpenAPI docs generator with the wrapper.
        # This allows the RFC7807 Problem schema to be added in, so it can be
        # referenced in API route metadata.
        def wrap_openapi() -> Dict:
            if not app.openapi_schema:
                app.openapi_schema = get_openapi(
                    title=app.title,
                    version=app.version,
                    openapi_version=app.openapi_version,
                    description=app.description,
                    routes=app.routes,
                    tags=app.openapi_tags,
                    servers=app.servers,
                )

            app.openapi_schema.setdefault('components', {}).setdefault('schemas', {})[name] = \
                schema.Problem.model_json_schema(ref_template='#/components/schemas/{model}')
            return app.openapi_schema
        app.openapi = wrap_openapi  # type: ignore


class ProblemMiddleware:
    """Middleware to catch all unhandled exceptions in the stack and return
    a corresponding RFC7807 JSON-formatted response.

    If 'debug' is set, the response JSON will be serialized in a more
    human-readable format, making it easier for debugging. Otherwise, the
    response JSON is serialized in a more compact format.
    """

    def __init__(
            self,
            app: ASGIApp,
            debug: bool = False,
            pre_hooks: Optional[Sequence[PreHook]] = None,
            post_hooks: Optional[Sequence[PostHook]] = None,
    ) -> None:
        self.app: ASGIApp = app
        self.pre_hooks = pre_hooks or []
        self.post_hooks = post_hooks or []
        self.debug: bool = debug

        self._handler = get_exception_handler(
            debug=self.debug,
            pre_hooks=self.pre_hooks,
            post_hooks=self.post_hooks,
        )

    # See: starlette.middleware.errors.ServerErrorMiddleware
    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope['type'] != 'http':
            await self.app(scope, receive, send)
            return

        response_started = False

        async def _send(message: Message) -> None:
            nonlocal response_started, send

            if message['type'] == 'http.response.start':
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, _send)
        except Exception as exc:
            if not response_started:
                response = await self._handler(Request(scope), exc)
                await response(scope, receive, send)

            # Continue to raise the exception. This allows the exception to
            # be logged, or optionally allows test clients to raise the error
            # in test cases.
            raise exc from None
