import argparse
import logging
import threading
from pathlib import Path
from typing import Optional

from flask import Flask, jsonify, render_template, request

from . import config
from .game import Game
from .history import HistoryError

logger = logging.getLogger(__name__)


def create_app(history_path: Optional[Path] = None) -> Flask:
    app = Flask(__name__)
    app.config["HISTORY_PATH"] = Path(history_path) if history_path else config.HISTORY_PATH
    app.config["GAME"] = Game(app.config["HISTORY_PATH"])
    # one game per process; requests are served one at a time against it
    app.config["GAME_LOCK"] = threading.RLock()

    @app.route('/', methods=['GET', 'POST'])
    def update():
        sel = request.values.get('field', '')
        game: Game = app.config["GAME"]
        error, status = None, 200

        with app.config["GAME_LOCK"]:
            try:
                game.dispatch(sel)
            except HistoryError as e:
                logger.warning("Load failed: %s", e)
                error, status = str(e), 400
            except OSError as e:
                logger.warning("Save failed: %s", e)
                error, status = f"{sel} failed: {e}", 500
            state = game.view()

        return render_template('playing_field.html', state=state, error=error), status

    @app.route('/state.json', methods=['GET'])
    def get_state():
        with app.config["GAME_LOCK"]:
            return jsonify(app.config["GAME"].view())

    return app


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Peg solitaire playing field")
    ap.add_argument("--host", default=config.HOST)
    ap.add_argument("--port", type=int, default=config.PORT)
    ap.add_argument("--history-file", type=Path, default=config.HISTORY_PATH)
    ap.add_argument("--debug", action="store_true", default=config.DEBUG)
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app(args.history_file)
    logger.info("Playing field at http://%s:%d/ (history file: %s)", args.host, args.port, args.history_file)
    app.run(host=args.host, port=args.port, debug=args.debug)
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
