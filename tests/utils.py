import base64
from typing import Any, Dict, List, Optional, Union
from urllib.parse import urlencode

from aws_lambda_powertools.utilities.typing import LambdaContext


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def generate_context() -> LambdaContext:
    context = LambdaContext()
    context._aws_request_id = '888888'
    context._function_name = 'test'
    context._memory_limit_in_mb = 128
    context._invoked_function_arn = 'arn:aws:lambda:eu-west-1:123456789012:function:test'
    return context


def generate_api_gw_event(
    http_method: str = 'GET',
    query: Optional[Dict[str, Union[str, List[str]]]] = None,
    body: Optional[str] = None,
    content_type: Optional[str] = None,
    session_id: Optional[str] = None,
    source_ip: Optional[str] = '10.0.0.1',
    user_agent: Optional[str] = 'pytest-agent/1.0',
    is_base64_encoded: bool = False,
) -> Dict[str, Any]:
    """Create a realistic API Gateway REST proxy event for Lambda.

    Args:
        http_method: The HTTP method of the request
        query: Query parameters, a list value repeats the parameter
        body: The raw request body
        content_type: Optional Content-Type header
        session_id: Optional session ID to include in the headers
        source_ip: The caller address in the request context
        user_agent: Optional User-Agent header
        is_base64_encoded: Encode the body as base64 like API Gateway does for binary media types
    """
    headers = {'accept': 'application/json'}
    if content_type:
        headers['Content-Type'] = content_type
    if session_id:
        headers['Session-Id'] = session_id
    if user_agent:
        headers['User-Agent'] = user_agent

    single_value_query = None
    multi_value_query = None
    if query:
        multi_value_query = {name: value if isinstance(value, list) else [value] for name, value in query.items()}
        single_value_query = {name: values[-1] for name, values in multi_value_query.items()}

    if body is not None and is_base64_encoded:
        body = base64.b64encode(body.encode('utf-8')).decode('ascii')

    return {
        'resource': '/inputs',
        'path': '/inputs',
        'httpMethod': http_method,
        'headers': headers,
        'multiValueHeaders': {name: [value] for name, value in headers.items()},
        'queryStringParameters': single_value_query,
        'multiValueQueryStringParameters': multi_value_query,
        'pathParameters': None,
        'stageVariables': None,
        'requestContext': {
            'resourcePath': '/inputs',
            'httpMethod': http_method,
            'path': '/Prod/inputs',
            'identity': {'sourceIp': source_ip},
            'requestId': 'test-request-id',
        },
        'body': body,
        'isBase64Encoded': is_base64_encoded,
    }


def form_body(params: Dict[str, Union[str, List[str]]]) -> str:
    return urlencode(params, doseq=True)
