"""
A basic example application showcasing problem_details with
simple hooks configured.

Run from the `examples` directory with:
    $ uvicorn hooks:app
"""

import logging

from fastapi import FastAPI, Request, Response

from problem_details import ProblemContext
from problem_details.middleware import register

logger = logging.getLogger(__name__)


def log_error(request: Request, exc: Exception) -> None:
    context = ProblemContext().put('path', request.url.path)
    logger.error('%s: %s', context.format('request to {path} failed'), exc)


def add_response_header(request: Request, response: Response, exc: Exception) -> None:
    response.headers['X-Custom-Header'] = 'foobar'


app = FastAPI()
register(
    app=app,
    pre_hooks=[log_error],
    post_hooks=[add_response_header],
    add_schema=True,
)


@app.get(
    path='/error',
    responses={
        500: {
            'content': {'application/problem+json': {
                'schema': {
                    '$ref': '#/components/schemas/Problem',
                },
            }},
        },
    },
)
async def error():
    raise ValueError('something went wrong')


# Response:
#
# $ curl -i localhost:8000/error
# HTTP/1.1 500 Internal Server Error
# server: uvicorn
# content-length: 125
# content-type: application/problem+json
# x-custom-header: foobar
#
# {"type":"about:blank","title":"Unexpected Server Error","status":500,"detail":"something went wrong","exc_type":"ValueError"}
