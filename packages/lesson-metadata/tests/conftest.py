"""Pytest fixtures for lesson-metadata tests: in-memory catalog and moto education table."""

import os

import pytest
from moto import mock_aws


class InMemoryLessonCatalog:
    """LessonCatalog for tests: lessons must be added before they can be updated."""

    def __init__(self) -> None:
        self.lessons: dict[tuple[str, str], dict] = {}
        self.updates: list[tuple[str, str, str]] = []

    def add_lesson(self, course_id: str, lesson_id: str) -> None:
        self.lessons[(course_id, lesson_id)] = {}

    def set_hls_manifest_key(
        self,
        course_id: str,
        lesson_id: str,
        hls_manifest_key: str,
        *,
        updated_at: str | None = None,
    ) -> bool:
        item = self.lessons.get((course_id, lesson_id))
        if item is None:
            return False
        item["hlsManifestKey"] = hls_manifest_key
        item["updatedAt"] = updated_at
        self.updates.append((course_id, lesson_id, hls_manifest_key))
        return True

    def get_hls_manifest_key(self, course_id: str, lesson_id: str) -> str | None:
        item = self.lessons.get((course_id, lesson_id))
        return item.get("hlsManifestKey") if item else None


@pytest.fixture
def catalog() -> InMemoryLessonCatalog:
    return InMemoryLessonCatalog()


@pytest.fixture
def aws_credentials():
    """Set fake AWS credentials for moto."""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"


@pytest.fixture
def education_table(aws_credentials):
    """Moto education table (PK/SK) with lesson c1/l1 present."""
    import boto3

    with mock_aws():
        client = boto3.client("dynamodb", region_name="us-east-1")
        client.create_table(
            TableName="test-education",
            BillingMode="PAY_PER_REQUEST",
            KeySchema=[
                {"AttributeName": "PK", "KeyType": "HASH"},
                {"AttributeName": "SK", "KeyType": "RANGE"},
            ],
            AttributeDefinitions=[
                {"AttributeName": "PK", "AttributeType": "S"},
                {"AttributeName": "SK", "AttributeType": "S"},
            ],
        )
        client.put_item(
            TableName="test-education",
            Item={
                "PK": {"S": "COURSE#c1"},
                "SK": {"S": "LESSON#l1"},
                "title": {"S": "Intro"},
            },
        )
        yield "test-education"
