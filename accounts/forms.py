"""Authentication and membership forms."""
from django import forms
from django.contrib.auth import authenticate

from .models import Membership, User


class LoginForm(forms.Form):
    email = forms.EmailField()
    password = forms.CharField()

    def __init__(self, request=None, *args, **kwargs):
        self.request = request
        self.user_cache = None
        super().__init__(*args, **kwargs)

    def clean(self):
        email = self.cleaned_data.get("email", "").lower()
        password = self.cleaned_data.get("password")
        if email and password:
            self.user_cache = authenticate(self.request, username=email, password=password)
            if self.user_cache is None:
                raise forms.ValidationError("Invalid email or password.")
            if not self.user_cache.is_active:
                raise forms.ValidationError("This account has been disabled.")
        return self.cleaned_data

    def get_user(self):
        return self.user_cache


class MembershipForm(forms.Form):
    """Add a user to a tenant, or update their existing membership."""
    email = forms.EmailField()
    role = forms.ChoiceField(choices=Membership.Role.choices, required=False)
    status = forms.ChoiceField(choices=Membership.Status.choices, required=False)

    def clean_email(self):
        email = self.cleaned_data["email"].lower()
        try:
            self.user = User.objects.get(email=email)
        except User.DoesNotExist:
            raise forms.ValidationError("No user with this email.")
        return email
