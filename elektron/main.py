import logging
from datetime import datetime
from typing import List

from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import FileResponse, HTMLResponse, JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from elektron.chart import THRESHOLDS
from elektron.config import PACKAGE_DIR, Settings, get_settings
from elektron.errors import ElektronError, UpstreamUnavailable, ValidationError
from elektron.schemas import ChartDataPoint, DateRegionQuery, Message, NearestRegion, Region, RegionInfo
from elektron.tools.electricity_tool import ElectricityPriceTool, find_nearest_region, list_regions
from elektron.transform import summarize, to_chart_points
from elektron.validation import validate_query

logger = logging.getLogger(__name__)

TODAY_ERROR = "Finner ikke noe data. :-("
QUERY_ERROR = "Noe gikk galt."
FONT_TYPES = {
    ".woff2": "font/woff2",
    ".woff": "font/woff",
    ".ttf": "font/ttf",
}
FONT_CACHE_CONTROL = "public, max-age=31536000"
UNSAFE_FONT_PARTS = ("..", "/", "\\", "\x00")
ERROR_RESPONSES = {400: {"model": Message}, 500: {"model": Message}}

app = FastAPI(title="elektron")
app.mount("/static", StaticFiles(directory=PACKAGE_DIR / "static"), name="static")
templates = Jinja2Templates(directory=PACKAGE_DIR / "templates")


@app.exception_handler(ElektronError)
async def elektron_error_handler(request: Request, exc: ElektronError):
    if isinstance(exc, ValidationError):
        logger.info(f"Rejected {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


# Dependency to get the upstream price client
def get_price_tool(settings: Settings = Depends(get_settings)) -> ElectricityPriceTool:
    return ElectricityPriceTool(settings.price_api_url, timeout=settings.request_timeout)


def todays_query(settings: Settings) -> DateRegionQuery:
    today = datetime.now(settings.tzinfo()).date()
    return DateRegionQuery.for_date(today, Region(settings.default_region))


def load_chart(tool: ElectricityPriceTool, query: DateRegionQuery, settings: Settings) -> List[ChartDataPoint]:
    records = tool.fetch_electricity_prices(query)
    return to_chart_points(records, settings.tzinfo())


@app.get("/", response_class=HTMLResponse)
def index(
    request: Request,
    settings: Settings = Depends(get_settings),
    tool: ElectricityPriceTool = Depends(get_price_tool),
):
    query = todays_query(settings)
    error = None
    try:
        points = load_chart(tool, query, settings)
    except UpstreamUnavailable:
        points = []
        error = TODAY_ERROR

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "points": [point.model_dump() for point in points],
            "summary": summarize(points),
            "today": query.as_date(),
            "region": query.region.value,
            "regions": list_regions(),
            "thresholds": THRESHOLDS,
            "error": error,
        },
    )


@app.get("/fonts/{filename:path}")
def serve_font(filename: str, settings: Settings = Depends(get_settings)):
    if not filename or any(part in filename for part in UNSAFE_FONT_PARTS):
        return PlainTextResponse("Invalid filename", status_code=400)

    font_dir = settings.font_dir.resolve()
    try:
        font_path = (font_dir / filename).resolve()
        found = font_path.is_file()
    except (ValueError, OSError):
        return PlainTextResponse("Invalid filename", status_code=400)
    if font_path.parent != font_dir:
        return PlainTextResponse("Invalid filename", status_code=400)
    if not found:
        return PlainTextResponse("Font not found", status_code=404)

    return FileResponse(
        font_path,
        media_type=FONT_TYPES.get(font_path.suffix.lower(), "application/octet-stream"),
        headers={"cache-control": FONT_CACHE_CONTROL},
    )


@app.get("/prices", response_model=List[ChartDataPoint], responses={500: {"model": Message}})
def todays_prices(
    settings: Settings = Depends(get_settings),
    tool: ElectricityPriceTool = Depends(get_price_tool),
):
    try:
        return load_chart(tool, todays_query(settings), settings)
    except UpstreamUnavailable as e:
        raise UpstreamUnavailable(TODAY_ERROR) from e


@app.get("/prices/{year}/{month}/{day}/{region}", response_model=List[ChartDataPoint], responses=ERROR_RESPONSES)
def prices_for_day(
    year: str,
    month: str,
    day: str,
    region: str,
    settings: Settings = Depends(get_settings),
    tool: ElectricityPriceTool = Depends(get_price_tool),
):
    query = validate_query(year, month, day, region)
    try:
        return load_chart(tool, query, settings)
    except UpstreamUnavailable as e:
        raise UpstreamUnavailable(QUERY_ERROR) from e


@app.get("/regions", response_model=List[RegionInfo])
def regions():
    return list_regions()


@app.get("/regions/nearest", response_model=NearestRegion)
def nearest_region(
    lat: float = Query(..., ge=-90, le=90, description="Latitude"),
    lon: float = Query(..., ge=-180, le=180, description="Longitude"),
):
    return find_nearest_region(lat, lon)
