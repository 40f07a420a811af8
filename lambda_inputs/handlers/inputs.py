import json
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any, Dict, Optional

from aws_lambda_env_modeler import get_environment_variables, init_environment_variables
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from lambda_inputs.handlers.models.env_vars import InputsHandlerEnvVars
from lambda_inputs.handlers.utils import sessions
from lambda_inputs.handlers.utils.observability import logger, metrics, tracer
from lambda_inputs.input_sources.constants import CONTENT_TYPE_JSON
from lambda_inputs.input_sources.errors import InputTypeError, MissingValue
from lambda_inputs.input_sources.request import RequestInputs
from lambda_inputs.logic.visits import greet_visitor


def _response(status: HTTPStatus, body: Dict[str, Any], session_id: Optional[str] = None) -> Dict[str, Any]:
    headers = {'Content-Type': CONTENT_TYPE_JSON}
    if session_id:
        headers['Session-Id'] = session_id
    return {'statusCode': status.value, 'body': json.dumps(body), 'headers': headers}


@init_environment_variables(model=InputsHandlerEnvVars)
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@metrics.log_metrics
@tracer.capture_lambda_handler(capture_response=False)
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    env_vars = get_environment_variables(model=InputsHandlerEnvVars)

    try:
        inputs = RequestInputs.from_event(event)
    except Exception:
        logger.exception('Error parsing event', exc_info=True)
        return _response(HTTPStatus.BAD_REQUEST, {'error': 'Malformed request'})

    session = inputs.session(sessions.session_store, lifetime_seconds=env_vars.SESSION_LIFETIME_SECONDS)
    if not session.is_valid():
        if session.data:
            # stale or taken over by another caller, never reuse its data
            logger.info('discarding invalid session', extra={'session_id': session.get_session_id()})
            metrics.add_metric(name='InvalidSessions', unit=MetricUnit.Count, value=1)
            session.destroy()
    session.stamp()

    try:
        result = greet_visitor(inputs.query, inputs.body, session, now=datetime.now(timezone.utc))
    except (MissingValue, InputTypeError) as exc:
        logger.info('invalid input', extra={'error': str(exc)})
        session.save()
        return _response(HTTPStatus.BAD_REQUEST, {'error': str(exc)}, session.get_session_id())

    session.save()
    metrics.add_metric(name='ValidRequests', unit=MetricUnit.Count, value=1)
    return _response(HTTPStatus.OK, result, session.get_session_id())
