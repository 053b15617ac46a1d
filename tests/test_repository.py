import pytest

from release_metrics.exceptions import InvalidRepositoryIdentifier
from release_metrics.models import RepositoryId
from release_metrics.repository import parse_repository


@pytest.mark.parametrize(
    "raw",
    [
        "https://host.example/orgA/projB",
        "https://github.com/orgA/projB/releases",
        "https://github.com/orgA/projB.git",
        "orgA/projB",
        "orgA/projB/",
    ],
)
def test_parse_repository(raw):
    assert parse_repository(raw) == RepositoryId("orgA", "projB")


def test_parse_repository_label():
    assert parse_repository("kubernetes/minikube").label == "kubernetes/minikube"


@pytest.mark.parametrize("raw", ["orgA", "", "https://host.example/orgA", "/"])
def test_parse_repository_rejects_single_segment(raw):
    with pytest.raises(InvalidRepositoryIdentifier):
        parse_repository(raw)


def test_parse_repository_malformed_url():
    with pytest.raises(InvalidRepositoryIdentifier, match="Malformed"):
        parse_repository("https://[github.com/orgA/projB")
