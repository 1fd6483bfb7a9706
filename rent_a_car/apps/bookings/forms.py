"""
Forms for the booking wizard steps.
"""

from django import forms
from django.conf import settings
from django.utils.translation import gettext_lazy as _

from .utils import combine_datetime

# Half-hour pickup/return slots offered in the time selects
TIME_SLOTS = [
    (f"{hour:02d}:{minute:02d}", f"{hour:02d}:{minute:02d}")
    for hour in range(24)
    for minute in (0, 30)
]


def first_errors(form) -> dict:
    """Map every failing field to its first error message."""
    return {
        field: str(errors[0])
        for field, errors in form.errors.items()
        if errors
    }


def time_select(choices=None):
    return forms.Select(
        choices=[('', _('Select time'))] + (choices or TIME_SLOTS),
        attrs={'class': 'form-control'}
    )


class PersonalInfoForm(forms.Form):
    """Step 1: who is renting the car."""
    first_name = forms.CharField(
        label=_('First Name'),
        min_length=2,
        error_messages={
            'required': _('First name must be at least 2 characters'),
            'min_length': _('First name must be at least 2 characters'),
        },
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': 'John'
        })
    )
    last_name = forms.CharField(
        label=_('Last Name'),
        min_length=2,
        error_messages={
            'required': _('Last name must be at least 2 characters'),
            'min_length': _('Last name must be at least 2 characters'),
        },
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': 'Doe'
        })
    )
    email = forms.EmailField(
        label=_('Email'),
        error_messages={
            'required': _('Please enter a valid email address'),
            'invalid': _('Please enter a valid email address'),
        },
        widget=forms.EmailInput(attrs={
            'class': 'form-control',
            'placeholder': 'john.doe@example.com'
        })
    )
    phone = forms.CharField(
        label=_('Phone'),
        error_messages={'required': _('Please enter a valid phone number')},
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': '+385 91 234 5678'
        })
    )

    def clean_phone(self):
        phone = self.cleaned_data.get('phone', '')
        if len(phone) < settings.RENT_A_CAR['PHONE_MIN_LENGTH']:
            raise forms.ValidationError(_('Please enter a valid phone number'))
        return phone


class BookingDatesForm(forms.Form):
    """Step 2: pickup and return."""
    pickup_date = forms.DateField(
        label=_('Pickup Date'),
        error_messages={'required': _('Pickup date is required')},
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'})
    )
    pickup_time = forms.TimeField(
        label=_('Pickup Time'),
        error_messages={'required': _('Pickup time is required')},
        widget=time_select()
    )
    dropoff_date = forms.DateField(
        label=_('Return Date'),
        error_messages={'required': _('Return date is required')},
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'})
    )
    dropoff_time = forms.TimeField(
        label=_('Return Time'),
        error_messages={'required': _('Return time is required')},
        widget=time_select()
    )

    def clean(self):
        cleaned_data = super().clean()
        pickup = combine_datetime(cleaned_data.get('pickup_date'), cleaned_data.get('pickup_time'))
        dropoff = combine_datetime(cleaned_data.get('dropoff_date'), cleaned_data.get('dropoff_time'))

        if pickup and dropoff and dropoff <= pickup:
            self.add_error('dropoff_date', _('Return date must be after pickup date'))

        return cleaned_data
