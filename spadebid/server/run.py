"""Single entry point: starts the local game server.

Usage:
    python -m spadebid.server.run

Environment variables (all optional):
    FLASK_HOST                 bind address                         (default 127.0.0.1)
    FLASK_PORT                 port for the web server              (default 3000)
    FLASK_DEBUG                1 = enable Flask reloader            (default 0)
    SPADEBID_INITIAL_DEAL_SIZE cards per player before bidding      (default 5)
    SPADEBID_MIN_CONTRACT_BID  lowest winning bid, also AI floor    (default 5)
    SPADEBID_TRUMP_MODE        choice | auto                        (default choice)
    SPADEBID_EVENT_LOG_SIZE    events kept in the table log         (default 50)
    SPADEBID_AI_DELAY          seconds between AI cards             (default 0.8)
    SPADEBID_AI_AUTOPLAY       1 = server plays AI turns by itself  (default 1)
"""
import logging

from .app import app as web_app
from .config import SERVER_CONFIG


def main():
    logging.basicConfig(
        level=logging.DEBUG if SERVER_CONFIG['debug'] else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    web_app.run(host=SERVER_CONFIG['host'], port=SERVER_CONFIG['port'], debug=SERVER_CONFIG['debug'])


if __name__ == '__main__':
    main()
