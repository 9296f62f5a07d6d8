# sales_trends/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sales_trends.lib.logger import setup_logging
from sales_trends.lib.exceptions import register_error_handlers
from sales_trends.core.config import settings
from sales_trends.routers.trends import router as trends_router
from sales_trends.routers.mcp import mcp_app

# Initialize structured logging
log = setup_logging()

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Daily revenue forecasting for the business dashboard, with MCP tools and structured logging.",
    lifespan=mcp_app.lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=True,
)

register_error_handlers(app)

@app.get("/health")
def health():
    return {"status": "ok"}

app.include_router(trends_router, prefix="/api")

#    This makes all MCP tools available under /mcp path
app.mount("/mcp", mcp_app)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
