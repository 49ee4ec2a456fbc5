"""Forms for media uploads."""
from django import forms
from django.conf import settings


class AssetUploadForm(forms.Form):
    file = forms.FileField()
    title = forms.CharField(max_length=255, required=False)
    alt_text = forms.CharField(max_length=255, required=False)

    def clean_file(self):
        upload = self.cleaned_data["file"]
        if upload.size > settings.MEDIA_MAX_UPLOAD_BYTES:
            raise forms.ValidationError("File is too large.")
        if upload.content_type not in settings.MEDIA_ALLOWED_MIME_TYPES:
            raise forms.ValidationError(f"Unsupported file type: {upload.content_type}")
        return upload
