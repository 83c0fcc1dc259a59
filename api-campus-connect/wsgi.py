# wsgi.py
import eventlet

# PRECISA ser o primeiro comando do arquivo
eventlet.monkey_patch()

from campus_connect.config.settings import settings  # noqa: E402
from campus_connect.infrastructure.realtime.socketio_server import socketio  # noqa: E402
from campus_connect.main import create_app  # noqa: E402

app = create_app()

if __name__ == "__main__":
    # em produção: gunicorn -k eventlet -w 1 wsgi:app
    socketio.run(app, host="0.0.0.0", port=5000, debug=settings.debug)
