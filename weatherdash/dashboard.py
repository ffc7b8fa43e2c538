"""Weather Dashboard: FastAPI backend serving the page and its JSON API."""

from pathlib import Path

from fastapi import FastAPI
from fastapi.responses import FileResponse, HTMLResponse
from pydantic import BaseModel

from weatherdash.controller import DashboardController

DASHBOARD_HTML = Path(__file__).parent / "static" / "dashboard.html"


class SearchRequest(BaseModel):
    query: str = ""


def create_app(controller: DashboardController) -> FastAPI:
    """Build the app around one controller. Every mutating endpoint returns the new view."""
    app = FastAPI(title="Weather Dashboard", version="0.1.0")
    app.state.controller = controller

    # ── View ────────────────────────────────────────────────────

    @app.get("/api/view")
    def get_view():
        return controller.view().to_dict()

    # ── Search & unit ───────────────────────────────────────────

    @app.post("/api/search")
    def search(req: SearchRequest):
        controller.start_search(req.query)
        return controller.view().to_dict()

    @app.post("/api/unit/toggle")
    def toggle_unit():
        controller.toggle_unit()
        return controller.view().to_dict()

    # ── Favorites ───────────────────────────────────────────────

    @app.post("/api/favorites")
    def add_favorite():
        controller.add_current_to_favorites()
        return controller.view().to_dict()

    @app.delete("/api/favorites/{name:path}")
    def remove_favorite(name: str):
        controller.remove_favorite(name)
        return controller.view().to_dict()

    @app.delete("/api/favorites")
    def clear_favorites():
        controller.clear_favorites()
        return controller.view().to_dict()

    @app.post("/api/notification/dismiss")
    def dismiss_notification():
        controller.dismiss_notification()
        return controller.view().to_dict()

    # ── Serve dashboard ─────────────────────────────────────────

    @app.get("/")
    def serve_dashboard():
        if DASHBOARD_HTML.exists():
            return FileResponse(DASHBOARD_HTML, media_type="text/html")
        return HTMLResponse("<h1>Dashboard not found</h1>", status_code=404)

    return app
