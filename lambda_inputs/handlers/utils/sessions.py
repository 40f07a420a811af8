from aws_lambda_env_modeler import get_environment_variables

from lambda_inputs.handlers.models.env_vars import InputsHandlerEnvVars
from lambda_inputs.input_sources.session_store import DynamoDBSessionStore, SessionStore

session_store: SessionStore = DynamoDBSessionStore(table_name_getter=lambda: get_environment_variables(model=InputsHandlerEnvVars).TABLE_NAME)
