import logging

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from Service_module.Service_crud import seed_default_services
from .State_crud import seed_default_states

logger = logging.getLogger(__name__)


def seed_reference_data(session_factory: sessionmaker) -> None:
    """
    Ensure the service catalogue and the default state page exist.
    Failures are logged and startup continues; seeding runs again next start.
    """
    try:
        with session_factory() as session:
            services_added = seed_default_services(session)
            states_added = seed_default_states(session)
        logger.info(f"Reference data ready ({services_added} services, {states_added} states added)")
    except OperationalError as e:
        logger.error(f"Failed to connect to database during reference data seeding: {e}")
        logger.warning("Reference data seeding will be retried on next startup")
    except Exception as e:
        logger.error(f"Unexpected error during reference data seeding: {e}", exc_info=True)
