"""DynamoDB implementation of EnrollmentChecker (enrollment items in the education table)."""

import logging

import boto3

logger = logging.getLogger(__name__)

# Paid enrollments stay "pending" until the payment webhook confirms them.
PENDING_PAYMENT_STATUS = "pending"


def enrollment_key(user_id: str, course_id: str) -> dict[str, str]:
    """Primary key of an enrollment item: PK=USER#{user_id}, SK=COURSE#{course_id}."""
    return {"PK": f"USER#{user_id}", "SK": f"COURSE#{course_id}"}


class DynamoDBEnrollmentChecker:
    """EnrollmentChecker over the education table; read-only."""

    def __init__(
        self,
        table_name: str,
        *,
        region_name: str | None = None,
        endpoint_url: str | None = None,
    ) -> None:
        self._table_name = table_name
        self._resource = boto3.resource(
            "dynamodb",
            region_name=region_name,
            endpoint_url=endpoint_url,
        )
        self._table = self._resource.Table(table_name)

    def check_enrollment(self, user_id: str, course_id: str) -> bool:
        """True if an enrollment item exists and its payment is not pending."""
        resp = self._table.get_item(Key=enrollment_key(user_id, course_id))
        item = resp.get("Item")
        enrolled = item is not None and item.get("paymentStatus") != PENDING_PAYMENT_STATUS
        logger.info(
            "user_id=%s course_id=%s enrolled=%s found=%s",
            user_id,
            course_id,
            enrolled,
            item is not None,
        )
        return enrolled
