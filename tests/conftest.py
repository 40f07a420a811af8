import os

# observability singletons read these when the handler modules are imported
os.environ.setdefault('POWERTOOLS_SERVICE_NAME', 'lambda-inputs')
os.environ.setdefault('LOG_LEVEL', 'DEBUG')
os.environ.setdefault('POWERTOOLS_TRACE_DISABLED', '1')
os.environ.setdefault('AWS_DEFAULT_REGION', 'us-east-1')
os.environ.setdefault('TABLE_NAME', 'lambda-inputs-sessions')
