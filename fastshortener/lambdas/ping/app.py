from fastshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from fastshortener.utils.helpers import guarantee_500_response
from fastshortener.utils.responses import response_200


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle GET /ping health checks. Never touches the data store."""
    return response_200({'message': 'pong'})
