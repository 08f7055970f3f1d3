"""
An example application showcasing problem_details with debug enabled,
where problem responses are pretty-printed.

Run from the `examples` directory with:
    $ uvicorn debug:app
"""

from fastapi import FastAPI

from problem_details import ProblemException, ProblemStatus, builder
from problem_details.middleware import register


app = FastAPI(debug=True)
register(app)


@app.get('/accounts/{account_id}/transfers')
async def transfer(account_id: str, amount: int):
    balance = 30
    problem = builder() \
        .type('https://example.com/probs/out-of-credit') \
        .title('You do not have enough credit.') \
        .status(ProblemStatus.FORBIDDEN) \
        .detail(f'Your current balance is {balance}, but that costs {amount}.') \
        .instance(f'/accounts/{account_id}/msgs/abc') \
        .extension('balance', balance) \
        .extension('accounts', [f'/accounts/{account_id}', '/accounts/67890']) \
        .build()

    # The exception message is derived from the problem, e.g.
    # "You do not have enough credit.: Your current balance is 30, ... (code: 403)"
    raise ProblemException(problem)


# Response:
#
# $ curl 'localhost:8000/accounts/12345/transfers?amount=50'
# {
#   "type": "https://example.com/probs/out-of-credit",
#   "title": "You do not have enough credit.",
#   "status": 403,
#   "detail": "Your current balance is 30, but that costs 50.",
#   "instance": "/accounts/12345/msgs/abc",
#   "balance": 30,
#   "accounts": [
#     "/accounts/12345",
#     "/accounts/67890"
#   ]
# }
