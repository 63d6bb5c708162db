"""FastAPI application for the Catan placement advisor."""

import os

import uvicorn

import common.app

from .routers import catan

app = common.app.create_app('Catan Advisor')
app.include_router(catan.router)


if __name__ == '__main__':
    uvicorn.run(app, host='0.0.0.0', port=int(os.environ.get('PORT', '8000')))
