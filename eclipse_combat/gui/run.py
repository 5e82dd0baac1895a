"""Launch script for the combat simulator API."""

import uvicorn


def main():
    """Start the API server."""
    print("=" * 70)
    print("Eclipse Combat Simulator API")
    print("=" * 70)
    print("\nStarting server...")
    print("POST fleets to http://localhost:8000/api/simulate")
    print("\nPress Ctrl+C to stop the server")
    print("=" * 70 + "\n")

    uvicorn.run(
        "eclipse_combat.gui.app:app",
        host="127.0.0.1",
        port=8000,
        log_level="info"
    )


if __name__ == "__main__":
    main()
