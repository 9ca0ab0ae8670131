"""Stormgate Carts FastAPI application.

Processes cart commands synchronously over HTTP. Every request runs inside
the carts domain context with the request path bound to the log context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# Initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the domain.toml overlay ("production" -> PostgreSQL).
from carts.domain import carts  # noqa: E402
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from carts.utils.logging import add_context, clear_context

carts.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Stormgate Carts API",
    description="Per-tenant, per-user shopping carts",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the carts domain context and a fresh log context for each request."""
    clear_context()
    add_context(path=request.url.path, method=request.method)
    with carts.domain_context():
        response = await call_next(request)
    return response


# ---------------------------------------------------------------------------
# Routers and error handlers
# ---------------------------------------------------------------------------
from carts.api.errors import register_error_handlers  # noqa: E402
from carts.api.routes import cart_router  # noqa: E402

register_error_handlers(app)
app.include_router(cart_router)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {"carts": {"name": carts.name}},
        }
    )
