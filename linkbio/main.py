import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from linkbio.config import settings
from linkbio.core.limiter import limiter
from linkbio.database.supabase_client import SupabaseClients
from linkbio.modules.registration.errors import RegistrationError
from linkbio.modules.auth import routes as auth_routes
from linkbio.modules.profiles import routes as profiles_routes
from linkbio.modules.visuals import routes as visuals_routes
from linkbio.modules.links import routes as links_routes
from linkbio.modules.badges import routes as badges_routes
from linkbio.modules.invites import routes as invites_routes
from linkbio.modules.payments import routes as payments_routes
from linkbio.modules.admin import routes as admin_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(RegistrationError)
async def registration_exception_handler(request: Request, exc: RegistrationError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    if settings.is_production:
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
    return JSONResponse(status_code=500, content={"detail": str(exc)})


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend([
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"X-XSS-Protection", b"1; mode=block"),
                ])
            await send(message)

        await self.app(scope, receive, send_with_headers)


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Module routers, all served under /api/v1
API_ROUTERS = [
    auth_routes.router,
    profiles_routes.router,
    visuals_routes.router,
    links_routes.router,
    badges_routes.router,
    invites_routes.router,
    payments_routes.router,
    admin_routes.router,
]
for api_router in API_ROUTERS:
    app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
async def startup_event():
    logger.info("Application startup")
    if not SupabaseClients.has_admin():
        logger.warning("SUPABASE_SERVICE_ROLE_KEY not set; failed registrations cannot clean up identities")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutdown")


@app.get("/")
async def root():
    return {"message": f"Welcome to {settings.app_name}", "status": "healthy"}


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready():
    """Readiness probe; identity_cleanup is false when failed signups can leave orphaned identities"""
    return {"status": "ready", "identity_cleanup": SupabaseClients.has_admin()}
