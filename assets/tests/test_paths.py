"""Tenant-aware storage paths."""
from dataclasses import dataclass
from typing import Optional

import pytest

from assets.paths import TenantAwarePathGenerator, asset_upload_to


@dataclass
class StubAsset:
    pk: object
    tenant_id: Optional[str] = None
    model_type: Optional[str] = None
    model_id: Optional[object] = None


@pytest.fixture
def generator():
    return TenantAwarePathGenerator()


def test_tenant_asset_path(generator):
    assert generator.base_path(StubAsset(pk=42, tenant_id="acme")) == "tenants/acme/media/42"


def test_central_asset_path(generator):
    asset = StubAsset(pk=42, model_type="User", model_id=7)
    assert generator.base_path(asset) == "central/user/7/42"


def test_tenant_path_ignores_owner_fields(generator):
    asset = StubAsset(pk=42, tenant_id="acme", model_type="User", model_id=7)
    assert generator.base_path(asset) == "tenants/acme/media/42"


@pytest.mark.parametrize(
    "asset, expected",
    [
        (StubAsset(pk=1), "central/unknown/unknown/1"),
        (StubAsset(pk=1, model_type="Page"), "central/page/unknown/1"),
        (StubAsset(pk=1, model_id=9), "central/unknown/9/1"),
        (StubAsset(pk=1, tenant_id="", model_type="", model_id=""), "central/unknown/unknown/1"),
    ],
)
def test_missing_owner_fields_fall_back_to_unknown(generator, asset, expected):
    assert generator.base_path(asset) == expected


def test_derived_paths(generator):
    asset = StubAsset(pk=42, tenant_id="acme")
    assert generator.path(asset) == "tenants/acme/media/42/"
    assert generator.conversions_path(asset) == "tenants/acme/media/42/conversions/"
    assert generator.responsive_images_path(asset) == "tenants/acme/media/42/responsive-images/"


def test_paths_are_relative(generator):
    for asset in (StubAsset(pk=1, tenant_id="acme"), StubAsset(pk=1)):
        for path in (generator.path(asset), generator.conversions_path(asset),
                     generator.responsive_images_path(asset)):
            assert not path.startswith("/")


def test_base_path_is_deterministic(generator):
    asset = StubAsset(pk=42, model_type="User", model_id=7)
    assert generator.base_path(asset) == generator.base_path(asset)
    assert generator.base_path(asset) == generator.base_path(StubAsset(pk=42, model_type="User", model_id=7))


def test_distinct_tenants_never_share_a_prefix(generator):
    a = generator.path(StubAsset(pk=42, tenant_id="acme"))
    b = generator.path(StubAsset(pk=42, tenant_id="globex"))
    assert a != b
    assert not a.startswith(b) and not b.startswith(a)


def test_distinct_central_owners_never_share_a_prefix(generator):
    paths = {
        generator.path(StubAsset(pk=42, model_type="User", model_id=7)),
        generator.path(StubAsset(pk=42, model_type="User", model_id=8)),
        generator.path(StubAsset(pk=42, model_type="Page", model_id=7)),
    }
    assert len(paths) == 3


def test_central_and_tenant_namespaces_are_disjoint(generator):
    tenant_path = generator.path(StubAsset(pk=7, tenant_id="user"))
    central_path = generator.path(StubAsset(pk=7, model_type="user", model_id=7))
    assert tenant_path.startswith("tenants/")
    assert central_path.startswith("central/")


def test_upload_to_keeps_only_basename():
    asset = StubAsset(pk="a1", tenant_id="acme")
    assert asset_upload_to(asset, "../../etc/passwd") == "tenants/acme/media/a1/passwd"
    assert asset_upload_to(asset, "C:\\photos\\logo.png") == "tenants/acme/media/a1/logo.png"
    assert asset_upload_to(asset, "logo.png") == "tenants/acme/media/a1/logo.png"
