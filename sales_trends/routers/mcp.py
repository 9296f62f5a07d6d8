from typing import List
from fastmcp import FastMCP
from sales_trends.tools.trends_tools import trends_tools
from sales_trends.schemas.trends import TrendsRequest, ForecastPoint
from sales_trends.lib.logger import log

# Initialize MCP Server (ASGI only, do NOT set host/port here)
mcp = FastMCP(name="sales-trends-server")

@mcp.tool(
    name="predict_trends",
    description="Forecast daily revenue with 95% bounds and a recommended action per day.",
)
def predict_trends(request: TrendsRequest) -> List[ForecastPoint]:
    """Forecast daily revenue with 95% bounds and a recommended action per day."""
    log.info("MCP predict_trends called")

    result = trends_tools.predict_trends(request.model_dump(by_alias=True, exclude_unset=True))
    structured = result["structuredContent"]
    if "error" in structured:
        raise ValueError(structured["error"])

    return [ForecastPoint(**p) for p in structured["predictions"]]


# Create streamable HTTP ASGI app
# We set path="/" so that when mounted at "/mcp" in main.py,
# the MCP endpoint is available at exactly "/mcp"
mcp_app = mcp.http_app(path="/", transport="streamable-http", stateless_http=True)
