# movie_bot/web/app.py

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from telegram import Update

from ..config import BOT_WEBHOOK_PATH, logger
from ..errors import StoreUnavailable
from ..services.selector import select_random_candidate
from ..state import AppContext, post_init, post_shutdown

NOT_FOUND_MESSAGE = "No movies found matching the criteria."


def create_app(app_context: AppContext) -> FastAPI:
    """
    Builds the HTTP app around an AppContext. The lifespan connects the store
    and starts the bot; the webhook route is only mounted in webhook mode.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await post_init(app_context)
        try:
            yield
        finally:
            await post_shutdown(app_context)

    app = FastAPI(title="Movie Bot", lifespan=lifespan)
    app.state.app_context = app_context
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/randommovie")
    async def random_movie(
        request: Request,
        min_rating: str | None = None,
        min_year: str | None = None,
    ):
        """Returns one random movie above the rating/year floor."""
        ctx: AppContext = request.app.state.app_context
        try:
            record = await select_random_candidate(
                ctx.store,
                min_rating or ctx.config.min_rating,
                min_year or ctx.config.min_year,
            )
        except StoreUnavailable as e:
            return JSONResponse(status_code=500, content={"message": str(e)})

        if record is None:
            return JSONResponse(status_code=404, content={"message": NOT_FOUND_MESSAGE})
        return record.to_response()

    if app_context.config.mode == "webhook" and app_context.application is not None:
        application = app_context.application

        @app.post(BOT_WEBHOOK_PATH)
        async def telegram_webhook(request: Request):
            """Hands an incoming Telegram update to the bot application."""
            payload = await request.json()
            update = Update.de_json(payload, application.bot)
            await application.update_queue.put(update)
            return {"ok": True}

        logger.info(f"Webhook route mounted at {BOT_WEBHOOK_PATH}.")

    return app
