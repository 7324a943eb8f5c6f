"""WSGI entry point for the scouting dashboard."""

import os

from flask import jsonify

from cs2intel import create_app

app = create_app()


@app.route("/health")
def health_check():
    """Report liveness and whether both upstream credentials are configured."""
    return jsonify(
        {
            "status": "ok",
            "faceit_configured": bool(app.config["FACEIT_API_KEY"]),
            "challengermode_configured": bool(
                app.config["CHALLENGERMODE_REFRESH_KEY"]
            ),
        }
    )


if __name__ == "__main__":
    port = int(os.environ.get("PORT", "5000"))
    app.run(debug=True, host="0.0.0.0", port=port)  # nosec
