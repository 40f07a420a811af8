from aws_lambda_powertools.logging.logger import Logger
from aws_lambda_powertools.metrics.metrics import Metrics
from aws_lambda_powertools.tracing.tracer import Tracer

METRICS_NAMESPACE = 'lambda_inputs_kpi'

logger: Logger = Logger()
metrics: Metrics = Metrics(namespace=METRICS_NAMESPACE)
tracer: Tracer = Tracer()
