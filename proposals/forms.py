"""
Forms for Proposals application.
"""
from django import forms

from .models import Proposal


class ProposalForm(forms.Form):
    """Payload for creating a proposal. Parties are referenced by email."""

    title = forms.CharField(max_length=255)
    description = forms.CharField(widget=forms.Textarea)
    duration = forms.IntegerField(min_value=1, help_text="Duration in days.")
    payment_terms = forms.CharField(max_length=255)
    status = forms.ChoiceField(choices=Proposal.Status.choices, required=False)
    client = forms.EmailField(max_length=254)
    service_provider = forms.EmailField(max_length=254)

    def clean_status(self):
        return self.cleaned_data.get('status') or Proposal.Status.PENDING

    def clean_client(self):
        return self.cleaned_data['client'].lower()

    def clean_service_provider(self):
        return self.cleaned_data['service_provider'].lower()


class ProposalUpdateForm(forms.Form):
    """Partial payload for updating a proposal."""

    title = forms.CharField(max_length=255, required=False)
    description = forms.CharField(widget=forms.Textarea, required=False)
    duration = forms.IntegerField(min_value=1, required=False)
    payment_terms = forms.CharField(max_length=255, required=False)
    status = forms.ChoiceField(choices=Proposal.Status.choices, required=False)

    def clean(self):
        cleaned_data = super().clean()

        unknown = sorted(set(self.data) - set(self.fields))
        if unknown:
            raise forms.ValidationError(f"Unknown fields: {', '.join(unknown)}")

        # Fields that were sent must not be blank
        for name in self.fields:
            if name in self.errors:
                continue
            if name in self.data and cleaned_data.get(name) in ('', None):
                self.add_error(name, 'This field cannot be blank.')

        return cleaned_data

    def patch(self) -> dict:
        """Return only the fields present in the submitted data."""
        return {name: self.cleaned_data[name] for name in self.fields if name in self.data}
