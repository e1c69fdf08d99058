import json
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse, Response

from chart import render_series_png
from colors import require_hex
from config import ChartConfig
from errors import MinichartError

log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.chart_config = ChartConfig.from_env()
    log.info("chart defaults: %s", app.state.chart_config)
    yield


app = FastAPI(title="minichart", lifespan=lifespan)


@app.exception_handler(MinichartError)
async def chart_error(request: Request, exc: MinichartError):
    log.warning("rejected %s: %s", request.url.path, exc)
    return JSONResponse(status_code=400, content={"detail": str(exc), "error": type(exc).__name__})


def _parse_data(data: str):
    try:
        parsed = json.loads(data)
    except json.JSONDecodeError as e:
        raise HTTPException(status_code=400, detail=f"data is not valid JSON: {e}")
    if not isinstance(parsed, (dict, list)):
        raise HTTPException(status_code=400, detail="data must be a JSON object or a list of [key, value] pairs")
    return parsed


def _chart_png(
    request: Request,
    kind: str,
    data: str,
    color: Optional[str],
    title: Optional[str],
    width: Optional[int],
    height: Optional[int],
    margin: Optional[int],
    background: Optional[str],
    show_values: bool,
    show_keys: bool,
) -> Response:
    cfg: ChartConfig = request.app.state.chart_config
    if color is None:
        color = cfg.line_color if kind == "line" else cfg.bar_color

    img = render_series_png(
        kind,
        _parse_data(data),
        width=width if width is not None else cfg.width,
        height=height if height is not None else cfg.height,
        margin=margin if margin is not None else cfg.margin,
        hex_color=color,
        title=title,
        background=require_hex(background if background is not None else cfg.background),
        show_values=show_values,
        show_keys=show_keys,
    )
    return Response(content=img, media_type="image/png")


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/api/chart_line.png")
def chart_line_png(
    request: Request,
    data: str = Query(...),
    color: Optional[str] = Query(None),
    title: Optional[str] = Query(None),
    width: Optional[int] = Query(None),
    height: Optional[int] = Query(None),
    margin: Optional[int] = Query(None),
    background: Optional[str] = Query(None),
    show_values: bool = Query(True),
    show_keys: bool = Query(True),
):
    """Line chart of a JSON {key: value} object"""
    return _chart_png(request, "line", data, color, title, width, height, margin,
                      background, show_values, show_keys)


@app.get("/api/chart_bar.png")
def chart_bar_png(
    request: Request,
    data: str = Query(...),
    color: Optional[str] = Query(None),
    title: Optional[str] = Query(None),
    width: Optional[int] = Query(None),
    height: Optional[int] = Query(None),
    margin: Optional[int] = Query(None),
    background: Optional[str] = Query(None),
    show_values: bool = Query(True),
    show_keys: bool = Query(True),
):
    """Bar chart of a JSON {key: value} object"""
    return _chart_png(request, "bar", data, color, title, width, height, margin,
                      background, show_values, show_keys)
