"""
Forms for the accounts application.
"""
from django import forms


class RegistrationForm(forms.Form):
    """Local sign-up payload."""

    email = forms.EmailField(max_length=254)
    password = forms.CharField(min_length=8, max_length=128, strip=False)
    username = forms.CharField(max_length=150, required=False)
    first_name = forms.CharField(max_length=150, required=False)
    last_name = forms.CharField(max_length=150, required=False)

    def clean_email(self):
        return self.cleaned_data["email"].lower()


class LoginForm(forms.Form):
    """Local email/password login payload."""

    email = forms.EmailField(max_length=254)
    password = forms.CharField(max_length=128, strip=False)

    def clean_email(self):
        return self.cleaned_data["email"].lower()


class GoogleLoginForm(forms.Form):
    """Google sign-in payload carrying the ID token issued to the frontend."""

    id_token = forms.CharField()
