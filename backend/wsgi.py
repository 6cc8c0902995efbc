try:
    from backend.scribble.server import create_app
except ImportError:  # pragma: no cover
    from scribble.server import create_app

app, socketio = create_app()
