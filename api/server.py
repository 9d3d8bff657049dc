import json
import logging
from typing import Optional

from aiohttp import web

from txsign.config import SignerSettings
from txsign.errors import InvalidRequestBody
from txsign.models import SignFailure
from txsign.pipeline import TransactionSigningPipeline


PIPELINE_KEY = web.AppKey("pipeline", TransactionSigningPipeline)
SETTINGS_KEY = web.AppKey("settings", SignerSettings)


def _cors_headers(settings: SignerSettings) -> dict:
    return {
        'Access-Control-Allow-Origin': settings.cors_allow_origin,
        'Access-Control-Allow-Methods': 'POST, OPTIONS',
        'Access-Control-Allow-Headers': 'Content-Type, Accept',
    }


@web.middleware
async def cors_middleware(request: web.Request, handler):
    try:
        response = await handler(request)
    except web.HTTPException as e:
        # aiohttp raises 404/405 as exceptions; answer them as JSON with CORS too
        if e.status == 405:
            response = web.json_response({"success": False, "error": "Method not allowed"}, status=405)
        else:
            response = web.json_response({"success": False, "error": e.reason}, status=e.status)
    response.headers.update(_cors_headers(request.app[SETTINGS_KEY]))
    return response


async def handle_options(request: web.Request) -> web.Response:
    return web.Response(status=200)


async def handle_sign(request: web.Request) -> web.Response:
    pipeline = request.app[PIPELINE_KEY]

    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logging.warning(f"❌ Unreadable request body: {e}")
        failure = SignFailure(
            error_kind=InvalidRequestBody.kind,
            message="Request body must be valid JSON",
            status=InvalidRequestBody.status,
        )
        return web.json_response(failure.to_dict(), status=failure.status)

    status, payload = pipeline.handle(body)
    return web.json_response(payload, status=status)


async def handle_health(request: web.Request) -> web.Response:
    return web.json_response({"status": "ok"})


def create_app(
    settings: Optional[SignerSettings] = None,
    pipeline: Optional[TransactionSigningPipeline] = None,
) -> web.Application:
    settings = settings or SignerSettings()
    app = web.Application(middlewares=[cors_middleware])
    app[SETTINGS_KEY] = settings
    app[PIPELINE_KEY] = pipeline or TransactionSigningPipeline(settings)

    app.router.add_post(settings.route, handle_sign)
    app.router.add_route('OPTIONS', settings.route, handle_options)
    app.router.add_get('/health', handle_health)
    return app
