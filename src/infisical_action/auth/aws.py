"""
AWS IAM identity proof.

Builds a SigV4-signed STS GetCallerIdentity request with the credentials
available to the job. The server replays it against STS to learn the
caller's ARN; the request itself is never sent from here.
"""
import base64
import json
import logging
import os
from typing import Dict, Optional

from botocore.auth import SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.session import Session

from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_REGION = "us-east-1"
IAM_REQUEST_BODY = "Action=GetCallerIdentity&Version=2011-06-15"


def _b64(value: str) -> str:
    return base64.b64encode(value.encode("utf-8")).decode("ascii")


def resolve_region(session: Session) -> str:
    return (
        os.environ.get("AWS_REGION")
        or os.environ.get("AWS_DEFAULT_REGION")
        or session.get_config_variable("region")
        or DEFAULT_REGION
    )


def build_signed_identity_request(session: Optional[Session] = None) -> Dict[str, str]:
    """Sign a GetCallerIdentity call and encode it for the aws-auth login body.

    Returns:
        iamHttpRequestMethod, iamRequestBody and iamRequestHeaders fields,
        body and headers base64 encoded

    Raises:
        ConfigurationError: If no AWS credentials can be found
    """
    session = session or Session()
    credentials = session.get_credentials()
    if credentials is None:
        raise ConfigurationError(
            "AWS credentials not found; configure them (e.g. aws-actions/configure-aws-credentials) before this step"
        )

    region = resolve_region(session)
    host = f"sts.{region}.amazonaws.com"
    request = AWSRequest(
        method="POST",
        url=f"https://{host}/",
        data=IAM_REQUEST_BODY,
        headers={
            "Content-Type": "application/x-www-form-urlencoded; charset=utf-8",
            "Host": host,
        },
    )
    SigV4Auth(credentials.get_frozen_credentials(), "sts", region).add_auth(request)
    logger.debug(f"Signed GetCallerIdentity request for {host}")

    return {
        "iamHttpRequestMethod": "POST",
        "iamRequestBody": _b64(IAM_REQUEST_BODY),
        "iamRequestHeaders": _b64(json.dumps(dict(request.headers.items()))),
    }
