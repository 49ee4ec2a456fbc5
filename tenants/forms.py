"""Forms for tenant provisioning."""
from django import forms
from django.utils.text import slugify


class TenantForm(forms.Form):
    name = forms.CharField(max_length=255)
    domain = forms.CharField(max_length=253)
    id = forms.CharField(max_length=63, required=False, help_text="Slug; derived from name if blank")

    def clean_domain(self):
        return self.cleaned_data["domain"].lower().strip()

    def clean_id(self):
        raw = self.cleaned_data.get("id", "")
        return slugify(raw) if raw else ""
