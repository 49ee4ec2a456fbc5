"""
Tenant-aware storage paths for uploaded assets.

Layout, relative to the storage root:

    tenants/{tenant_id}/media/{asset_id}/                  tenant assets
    central/{model_type}/{model_id}/{asset_id}/            central assets

with ``conversions/`` and ``responsive-images/`` beneath each base. Tenant
data lives under a single ``tenants/{id}/`` prefix, so a tenant's files can
be exported or deleted by prefix, and central files never share a
namespace with tenant files.
"""
import posixpath

UNKNOWN = "unknown"


def _segment(value):
    if value is None or value == "":
        return UNKNOWN
    return str(value)


class TenantAwarePathGenerator:
    """Derive storage paths from an asset's tenant and owner fields.

    The asset must expose ``pk``, ``tenant_id``, ``model_type`` and
    ``model_id``; the last two are only read when ``tenant_id`` is empty.
    """

    def base_path(self, asset):
        tenant_id = getattr(asset, "tenant_id", None)
        if tenant_id not in (None, ""):
            return f"tenants/{tenant_id}/media/{asset.pk}"
        model_type = _segment(getattr(asset, "model_type", None)).lower()
        model_id = _segment(getattr(asset, "model_id", None))
        return f"central/{model_type}/{model_id}/{asset.pk}"

    def path(self, asset):
        return self.base_path(asset) + "/"

    def conversions_path(self, asset):
        return self.base_path(asset) + "/conversions/"

    def responsive_images_path(self, asset):
        return self.base_path(asset) + "/responsive-images/"


path_generator = TenantAwarePathGenerator()


def asset_upload_to(instance, filename):
    """``FileField.upload_to`` hook; keeps only the file's basename."""
    name = posixpath.basename(filename.replace("\\", "/")) or "file"
    return path_generator.path(instance) + name
