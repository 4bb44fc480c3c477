"""Run the HTTP server."""

import cyclopts
import uvicorn

from trackrate.cli.console import get_console

app = cyclopts.App(name="server", help="Run the TrackRate API server")


@app.default
def run(host: str = "127.0.0.1", port: int = 8000, reload: bool = False) -> None:
    """Start the API server in the foreground.

    Args:
        host: Host to bind to.
        port: Port to listen on.
        reload: Restart on code changes (development only).
    """
    get_console().info(f"Serving on http://{host}:{port}")
    uvicorn.run(
        "trackrate.application.api.rest.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )
