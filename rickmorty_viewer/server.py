"""Simple Flask server exposing the character list and viewing history as JSON."""

import asyncio
from typing import Optional

from flask import Flask, Response, jsonify, request

from .constants.config import DEFAULT_HOST, DEFAULT_PORT, UNKNOWN_ERROR_MESSAGE
from .errors import StorageError
from .ui.adapter import CharactersAdapter
from .ui.paging import page_key_from_url
from .viewmodels.characters import CharactersViewModel


def _error(message: Optional[str], status: int) -> tuple[Response, int]:
    return jsonify({"error": message or UNKNOWN_ERROR_MESSAGE}), status


def create_app(view_model: Optional[CharactersViewModel] = None) -> Flask:
    """Create the Flask app around a single view-model.

    The view-model (and its episode cache) lives as long as the app.
    """
    app = Flask(__name__)
    vm = view_model or CharactersViewModel.create()
    app.config["VIEW_MODEL"] = vm

    @app.route("/api/characters")
    def list_characters() -> Response | tuple[Response, int]:
        """Serve one page of bound character rows."""
        page = request.args.get("page", default=1, type=int)
        if page < 1:
            return _error("page must be >= 1", 400)

        async def load():
            response = await vm.get_characters(page)
            if response is None or response.characters is None:
                return None, []
            adapter = CharactersAdapter(vm)
            adapter.submit_data(response.characters)
            return response, await adapter.bind_all()

        response, rows = asyncio.run(load())
        if response is None:
            return _error(vm.error_data.value, 502)

        return jsonify({
            "page": page,
            "pages": response.info.pages,
            "count": response.info.count,
            "next_page": page_key_from_url(response.info.next),
            "prev_page": page_key_from_url(response.info.prev),
            "results": [row.to_dict() for row in rows],
        })

    @app.route("/api/characters/<int:character_id>/view", methods=["POST"])
    def view_character(character_id: int) -> Response | tuple[Response, int]:
        """Fetch a character and save it to the viewing history."""
        async def save():
            character = await vm.get_character(character_id)
            if character is None:
                return None, None
            return character, await vm.save_viewed_character(character)

        try:
            character, saved = asyncio.run(save())
        except StorageError as e:
            return _error(str(e), 500)

        if character is None:
            return _error(vm.error_data.value, 502)
        if saved is None:
            return _error(f"Character {character_id} has no episodes", 404)

        return jsonify(saved.model_dump(mode="json")), 201

    @app.route("/api/viewed")
    def viewed_characters() -> Response:
        """Serve the viewing history, most recent first."""
        include_images = request.args.get("images", default="1") != "0"
        exclude = None if include_images else {"image_base64"}
        viewed = vm.get_viewed_characters().value or []
        return jsonify([c.model_dump(mode="json", exclude=exclude) for c in viewed])

    return app


def run_server(
    view_model: Optional[CharactersViewModel] = None,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    debug: bool = False,
) -> None:
    """Run the Flask development server."""
    app = create_app(view_model)
    print(f"\nRick & Morty Viewer running at http://localhost:{port}/api/characters\n")
    app.run(host=host, port=port, debug=debug)


if __name__ == "__main__":
    run_server()
