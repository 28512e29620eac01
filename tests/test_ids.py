"""Identifier tests."""
import pytest

from tenant_api.core.exceptions import ValidationError
from tenant_api.core.ids import TENANT_ID_PREFIX, new_tenant_id, parse_tenant_id, tenant_urn


def test_new_tenant_id_shape():
    tenant_id = new_tenant_id()
    prefix, body = tenant_id.split("-")

    assert prefix == TENANT_ID_PREFIX
    assert len(body) == 21
    assert body.isalnum()
    assert parse_tenant_id(tenant_id) == tenant_id


@pytest.mark.parametrize("value", [
    "",
    "tnntten",
    "tnntten-tooshort",
    "tnntten-aaaaaaaaaaaaaaaaaaaa!",
    "loadbal-aaaaaaaaaaaaaaaaaaaaa",
    "6f1c0a8e-2b7d-4b8e-9a43-5d1f3b9c2e11",
])
def test_parse_tenant_id_rejects(value):
    with pytest.raises(ValidationError):
        parse_tenant_id(value)


def test_tenant_urn():
    assert tenant_urn("tnntten-abc") == "urn:infratographer:tenant:tnntten-abc"
