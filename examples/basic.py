"""
A basic example application showcasing problem_details

Run from the `examples` directory with:
    $ uvicorn basic:app
"""

from fastapi import FastAPI

from problem_details import ProblemException, ProblemStatus, builder
from problem_details.middleware import register


app = FastAPI()
register(app)


class AuthenticationError(ProblemException):
    """An example of how to create a custom subclass of ProblemException.

    This class also defines additional headers which should be sent with
    the error response.
    """

    headers = {
        'WWW-Authenticate': 'Bearer',
    }

    def __init__(self, msg: str) -> None:
        super(AuthenticationError, self).__init__(
            builder()
            .status(ProblemStatus.UNAUTHORIZED)
            .detail(msg)
            .build(),
        )


@app.get('/')
async def root():
    return {'message': 'Hello World'}


@app.get('/auth')
async def custom():
    raise AuthenticationError('user is unauthenticated')


@app.get('/orders/{order_id}')
async def order(order_id: int):
    raise ProblemException(
        builder()
        .type('https://example.com/problems/out-of-stock')
        .status(409)
        .detail(f'order {order_id} cannot be fulfilled')
        .instance(f'/orders/{order_id}')
        .extension('order_id', order_id)
        .build()
    )


@app.get('/error')
async def error():
    raise ValueError('something went wrong')


# Response:
#
# $ curl localhost:8000/error
# {"type":"about:blank","title":"Unexpected Server Error","status":500,"detail":"something went wrong","exc_type":"ValueError"}
#
# $ curl localhost:8000/orders/42
# {"type":"https://example.com/problems/out-of-stock","title":"Conflict","status":409,"detail":"order 42 cannot be fulfilled","instance":"/orders/42","order_id":42}
