"""Media API – tenant libraries and the central (platform) library."""
import logging

from django.conf import settings
from django.contrib.contenttypes.models import ContentType
from django.http import JsonResponse
from django.views.decorators.http import require_http_methods

from accounts.decorators import permission_required, superadmin_required
from auditlog.services import log_event
from .forms import AssetUploadForm
from .models import Asset

logger = logging.getLogger(__name__)


def _parse_int(value, default, minimum=1, maximum=None):
    try:
        v = int(value)
        v = max(v, minimum)
        if maximum:
            v = min(v, maximum)
        return v
    except (TypeError, ValueError):
        return default


def serialize_asset(asset):
    return {
        "id": str(asset.pk),
        "tenant_id": asset.tenant_id,
        "title": asset.title,
        "alt_text": asset.alt_text,
        "mime_type": asset.mime_type,
        "size": asset.size,
        "path": asset.file.name,
        "url": asset.file.url if asset.file else None,
        "created_at": asset.created_at.isoformat() if asset.created_at else None,
    }


def _page(request, qs):
    page = _parse_int(request.GET.get("page"), 1)
    page_size = _parse_int(request.GET.get("page_size"), settings.DEFAULT_PAGE_SIZE,
                           maximum=settings.MAX_PAGE_SIZE)
    total = qs.count()
    offset = (page - 1) * page_size
    items = [serialize_asset(a) for a in qs[offset:offset + page_size]]
    return JsonResponse({"results": items, "total": total, "page": page, "page_size": page_size})


def _store(request, **fields):
    """Validate the upload and save it as an asset built from ``fields``."""
    form = AssetUploadForm(request.POST, request.FILES)
    if not form.is_valid():
        return JsonResponse({"detail": "invalid", "errors": form.errors}, status=422)
    upload = form.cleaned_data["file"]
    asset = Asset(
        title=form.cleaned_data["title"] or upload.name,
        alt_text=form.cleaned_data["alt_text"],
        mime_type=upload.content_type,
        size=upload.size,
        uploaded_by=request.user,
        **fields,
    )
    # The storage path derives from pk and tenant/owner, all set before saving.
    asset.file.save(upload.name, upload, save=False)
    asset.save()
    logger.info("Stored asset %s at %s", asset.pk, asset.file.name)
    log_event(request, "media_uploaded", detail=f"Uploaded {asset.file.name}")
    return JsonResponse(serialize_asset(asset), status=201)


@permission_required("media.view")
def _list_media(request):
    return _page(request, Asset.objects.for_tenant(request.tenant_context))


@permission_required("media.manage")
def _upload_media(request):
    return _store(request, tenant=request.tenant_context)


@require_http_methods(["GET", "POST"])
def media_view(request):
    """Tenant media library: ``media.view`` to list, ``media.manage`` to upload."""
    if request.method == "POST":
        return _upload_media(request)
    return _list_media(request)


@superadmin_required
@require_http_methods(["GET", "POST"])
def central_media_view(request):
    """Platform-level media, filed under the uploading superadmin's user record."""
    if request.method == "POST":
        return _store(
            request,
            tenant=None,
            content_type=ContentType.objects.get_for_model(request.user),
            object_id=str(request.user.pk),
        )
    return _page(request, Asset.objects.central())
