"""
Flask app serving the publication list to the site's page templates.

Routes:
    GET /publications       JSON list, optional ``?author=<slug>`` filter
    GET /publications.bib   concatenated BibTeX of the listed entries
    GET /health             liveness probe
"""
from typing import List, Optional

from flask import Flask, Response, jsonify, request

from .models import Publication
from .name_utils import slugify
from .service import PublicationService, _get_service


def filter_by_author(publications: List[Publication], author_slug: str) -> List[Publication]:
    """Keep publications with an author whose slug equals ``author_slug``."""
    wanted = slugify(author_slug.strip())
    return [pub for pub in publications if any(slugify(a) == wanted for a in pub.authors)]


def create_app(service: Optional[PublicationService] = None) -> Flask:
    app = Flask(__name__)
    app.config["PUBLICATION_SERVICE"] = service

    def current_publications() -> List[Publication]:
        svc = app.config["PUBLICATION_SERVICE"] or _get_service()
        publications = svc.get_publications()
        author = request.args.get("author")
        if author:
            publications = filter_by_author(publications, author)
        return publications

    @app.route("/publications", methods=["GET"])
    def publications():
        return jsonify([pub.to_dict() for pub in current_publications()])

    @app.route("/publications.bib", methods=["GET"])
    def publications_bibtex():
        body = "\n\n".join(pub.bibtex for pub in current_publications())
        return Response(body, mimetype="text/plain")

    @app.route("/health", methods=["GET"])
    def health():
        return "ok", 200

    @app.errorhandler(404)
    def not_found_error(error):
        return jsonify({"error": "Not found"}), 404

    return app
