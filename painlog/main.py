"""
FastAPI Application for the Pain Log Dashboard

Main web application that provides:
- CSV file upload interface
- Pain log processing via the engine pipeline
- Dashboard with four charts (daily trend, area frequency, pain over time,
  hourly average)
- Reset back to the empty upload page
"""

from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import FastAPI, File, Request, UploadFile
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from painlog.charts import build_chart_data
from painlog.engine.pipeline import analyze_upload
from painlog.session import DashboardSession, SessionManager
from painlog.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000
TEMPLATE_NAME = "dashboard.html"

app = FastAPI(title="Pain Log Dashboard", version="1.0.0")

# One live dashboard (single-user, local use only)
sessions = SessionManager()

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


def human_number(value, decimals: int = 2):
    """
    Format numeric values for display:
    - No scientific notation.
    - Trim trailing zeros and decimal point.
    """
    try:
        v = float(value)
    except (TypeError, ValueError):
        return value

    text = f"{v:.{decimals}f}"
    text = text.rstrip("0").rstrip(".")
    return text if text != "-0" else "0"


templates.env.filters["human_number"] = human_number


def _page_context(session: Optional[DashboardSession], error: Optional[str] = None) -> Dict[str, Any]:
    if session is None:
        return {
            "error": error,
            "file_name": None,
            "metrics": None,
            "summary": None,
            "has_data": False,
            "chart_data": None,
        }
    return {
        "error": error,
        "file_name": session.file_name,
        "metrics": session.metrics,
        "summary": session.summary,
        "has_data": session.has_data,
        "chart_data": session.chart_data,
    }


@app.get("/", response_class=HTMLResponse)
async def index(request: Request):
    """Render the upload page, or the dashboard of the current upload."""
    return templates.TemplateResponse(request, TEMPLATE_NAME, _page_context(sessions.current))


@app.post("/analyze", response_class=HTMLResponse)
def analyze(request: Request, file: Optional[UploadFile] = File(None)):
    """
    Process an uploaded pain log CSV and render the dashboard.

    Expected CSV columns: date, time, area, pain_score.
    On failure the previous dashboard (if any) stays as it was.

    A plain def so FastAPI runs it in its threadpool; concurrent uploads
    then wait on the session lock instead of blocking the event loop.
    """
    if file is None or not file.filename:
        return templates.TemplateResponse(
            request,
            TEMPLATE_NAME,
            _page_context(sessions.current, error="Please choose a CSV file to upload."),
            status_code=400,
        )

    try:
        contents = file.file.read()
        session = sessions.start_upload(file.filename, file.content_type, contents)
    except ValueError as e:
        logger.warning("Rejected upload %s: %s", file.filename, e)
        return templates.TemplateResponse(
            request,
            TEMPLATE_NAME,
            _page_context(sessions.current, error=str(e)),
            status_code=400,
        )
    except Exception as e:
        logger.exception("Failed to process upload %s", file.filename)
        return templates.TemplateResponse(
            request,
            TEMPLATE_NAME,
            _page_context(sessions.current, error=f"Error processing file: {str(e)}"),
            status_code=500,
        )

    return templates.TemplateResponse(request, TEMPLATE_NAME, _page_context(session))


@app.post("/reset")
def reset():
    """Discard the current dashboard and go back to the upload page."""
    sessions.reset()
    return RedirectResponse(url="/", status_code=303)


@app.get("/api/session")
async def current_session():
    """JSON view of the live dashboard session."""
    session = sessions.current
    if session is None:
        return JSONResponse(content={"active": False})
    return JSONResponse(content=session.to_dict())


@app.post("/report/json")
def download_json(file: UploadFile = File(...)):
    """
    Process an uploaded CSV file and return the aggregations as JSON.

    Does not touch the dashboard session.
    """
    try:
        contents = file.file.read()
        try:
            _, results = analyze_upload(file.filename, file.content_type, contents)
        except ValueError as e:
            return JSONResponse(
                status_code=400,
                content={"error": str(e)}
            )

        aggregations = results["aggregations"]
        summary = {
            "file_info": {
                "source": "uploaded_csv",
                "file_name": file.filename,
            },
            "has_data": results["has_data"],
            "metrics": results["basic_metrics"],
            "summary": results["summary"],
            "aggregations": aggregations.to_dict(),
            "chart_data": build_chart_data(aggregations),
        }

        return JSONResponse(content=summary)

    except Exception as e:
        logger.exception("Failed to build JSON report for %s", file.filename)
        return JSONResponse(
            status_code=500,
            content={"error": f"Error processing file: {str(e)}"}
        )


if __name__ == "__main__":
    import uvicorn
    configure_logging()
    uvicorn.run(app, host=DEFAULT_HOST, port=DEFAULT_PORT)
