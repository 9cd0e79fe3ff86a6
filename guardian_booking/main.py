import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from guardian_booking.core import config
from guardian_booking.core.context import get_context
from guardian_booking.routes import appointment_routes, booking_routes, catalog_routes

logging.basicConfig(level=config.LOG_LEVEL)

app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

logger = logging.getLogger(__name__)


@app.on_event('startup')
def initialize_context() -> None:
    try:
        config.validate_runtime_config()
    except RuntimeError:
        logger.exception('Invalid runtime configuration for environment %s.', config.APP_ENV)
        raise

    context = get_context()
    logger.info(
        'Booking context ready with %d students and %d appointment requests',
        len(context.catalog.students),
        len(context.repository),
    )


@app.get('/')
def root():
    return {'status': 'Guardian Booking API Running'}


app.include_router(catalog_routes.router, prefix='/catalog')
app.include_router(booking_routes.router, prefix='/booking')
app.include_router(appointment_routes.router, prefix='/appointments')
