from typing import Any

from fastapi import FastAPI, Query, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from site_analysis.api.dependencies import HandlerDep, lifespan
from site_analysis.config import settings
from site_analysis.constants import API_BASE_PATH, APP_DESCRIPTION, APP_NAME, APP_VERSION


def create_app() -> FastAPI:
    """Build the FastAPI application with all check routes."""
    app = FastAPI(
        title=APP_NAME,
        description=APP_DESCRIPTION,
        version=APP_VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Cache"],
    )

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": APP_NAME,
            "version": APP_VERSION,
            "description": APP_DESCRIPTION,
            "endpoints": {
                "dns": f"{API_BASE_PATH}/dns",
                "whois": f"{API_BASE_PATH}/whois",
                "ssl": f"{API_BASE_PATH}/ssl",
                "headers": f"{API_BASE_PATH}/headers",
                "security": f"{API_BASE_PATH}/security",
                "performance": f"{API_BASE_PATH}/performance",
                "health": "/health",
                "docs": "/docs",
            },
        }

    @app.get("/health")
    async def health(handler: HandlerDep) -> JSONResponse:
        """Health check endpoint."""
        payload, status_code = await handler.health_check()
        return JSONResponse(payload, status_code=status_code)

    @app.get(f"{API_BASE_PATH}/dns")
    async def dns_lookup(
        handler: HandlerDep,
        domain: str | None = None,
        record_type: str | None = Query(None, alias="type"),
    ) -> Response:
        """Resolve DNS records of one type for a domain."""
        return await handler.handle("dns", {"domain": domain, "type": record_type})

    @app.get(f"{API_BASE_PATH}/whois")
    async def whois_lookup(handler: HandlerDep, domain: str | None = None) -> Response:
        """Look up RDAP registration data for a domain."""
        return await handler.handle("whois", {"domain": domain})

    @app.get(f"{API_BASE_PATH}/ssl")
    async def ssl_check(handler: HandlerDep, domain: str | None = None) -> Response:
        """Report certificate status for a domain."""
        return await handler.handle("ssl", {"domain": domain})

    @app.get(f"{API_BASE_PATH}/headers")
    async def headers_analysis(handler: HandlerDep, url: str | None = None) -> Response:
        """Grade the security headers a URL responds with."""
        return await handler.handle("headers", {"url": url})

    @app.get(f"{API_BASE_PATH}/security")
    async def security_check(handler: HandlerDep, url: str | None = None) -> Response:
        """Score basic security heuristics for a URL."""
        return await handler.handle("security", {"url": url})

    @app.get(f"{API_BASE_PATH}/performance")
    async def performance_check(handler: HandlerDep, url: str | None = None) -> Response:
        """Time a page load for a URL."""
        return await handler.handle("performance", {"url": url})

    return app


app = create_app()


def main() -> None:
    import uvicorn

    uvicorn.run(
        "site_analysis.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )


if __name__ == "__main__":
    main()
