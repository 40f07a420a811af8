from datetime import datetime
from typing import Any, Dict

from lambda_inputs.handlers.utils.observability import logger
from lambda_inputs.input_sources.base import AbstractInput

VISITS_KEY = 'visits'
LAST_VISIT_KEY = 'last_visit'


def greet_visitor(query: AbstractInput, body: AbstractInput, session: AbstractInput, now: datetime) -> Dict[str, Any]:
    """Count the visit in the session and build the greeting for the caller."""
    visits = session.get_int(VISITS_KEY, 0) + 1
    previous_visit = session.get_as_datetime(LAST_VISIT_KEY) if session.has(LAST_VISIT_KEY) else None

    name = query.get_string('name', 'stranger')
    greeting = body.get_string('greeting', 'Hello')
    tags = query.get_as_array('tag', [])

    # stored as text so every session backend can keep it
    session.set_int(VISITS_KEY, visits)
    session.set_string(LAST_VISIT_KEY, now.isoformat())

    logger.info('greeting visitor', extra={'visits': visits, 'tags': tags})
    return {
        'message': f'{greeting}, {name}!',
        'visits': visits,
        'previous_visit': previous_visit.isoformat() if previous_visit else None,
        'tags': list(tags),
    }
