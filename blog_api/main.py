from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from blog_api.core.config import settings
from blog_api.core.deps import get_post_service, get_user_service
from blog_api.core.errors import install_error_handlers
from blog_api.core.logging_setup import configure_logging
from blog_api.core.request_tracking import install_request_tracking
from blog_api.api.router import router as api_router

_LOG = configure_logging()

app = FastAPI(title=settings.APP_NAME, version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "HEAD", "POST", "PATCH", "DELETE"],
    allow_headers=["*"],
)
install_request_tracking(app)
install_error_handlers(app)

app.include_router(api_router, prefix=settings.api_prefix)

if settings.SEED_DEMO_DATA:
    from blog_api.data.demo_seed import seed_demo_data

    seed_demo_data(get_post_service(), get_user_service())

@app.get("/", include_in_schema=False, response_class=PlainTextResponse)
def landing():
    return f"Hello from {settings.APP_NAME}!"

@app.get("/health")
def health():
    return {"status": "ok", "env": settings.APP_ENV}


if __name__ == "__main__":
    import uvicorn

    _LOG.info("starting %s on %s:%s", settings.APP_NAME, settings.HOST, settings.PORT)
    uvicorn.run("blog_api.main:app", host=settings.HOST, port=settings.PORT)
