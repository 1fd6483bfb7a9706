"""
Forms for Payment operations.
"""

from django import forms
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
import re

from .utils import card_expired, normalize_card_number, parse_expiry


class PaymentMethod:
    CREDIT_CARD = 'credit_card'
    DEBIT_CARD = 'debit_card'

    choices = [
        (CREDIT_CARD, _('Credit Card')),
        (DEBIT_CARD, _('Debit Card')),
    ]
    card_methods = (CREDIT_CARD, DEBIT_CARD)


class PaymentForm(forms.Form):
    """Step 4: payment details, only checked for card methods."""
    payment_method = forms.ChoiceField(
        label=_('Payment Method'),
        choices=PaymentMethod.choices,
        initial=PaymentMethod.CREDIT_CARD,
        widget=forms.RadioSelect(attrs={'class': 'form-check-input'})
    )
    card_number = forms.CharField(
        label=_('Card Number'),
        required=False,
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': '1234 5678 9012 3456',
            'inputmode': 'numeric',
            'maxlength': 19
        })
    )
    card_name = forms.CharField(
        label=_('Cardholder Name'),
        required=False,
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': 'John Doe'
        })
    )
    expiry_date = forms.CharField(
        label=_('Expiry Date'),
        required=False,
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': 'MM/YY',
            'maxlength': 5
        })
    )
    cvv = forms.CharField(
        label=_('CVV'),
        required=False,
        widget=forms.PasswordInput(render_value=True, attrs={
            'class': 'form-control',
            'placeholder': '123',
            'maxlength': 4
        })
    )

    def __init__(self, *args, today=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.today = today or timezone.localdate()

    def clean(self):
        cleaned_data = super().clean()
        if cleaned_data.get('payment_method') not in PaymentMethod.card_methods:
            return cleaned_data

        card_number = cleaned_data.get('card_number', '')
        card_digits = normalize_card_number(card_number)
        if not card_number:
            self.add_error('card_number', _('Card number is required'))
        elif not re.fullmatch(r'[0-9]{16}', card_digits):
            self.add_error('card_number', _('Card number must be exactly 16 digits'))

        if not cleaned_data.get('card_name'):
            self.add_error('card_name', _('Cardholder name is required'))

        expiry_date = cleaned_data.get('expiry_date', '')
        expiry = parse_expiry(expiry_date)
        if not expiry_date:
            self.add_error('expiry_date', _('Expiry date is required'))
        elif expiry is None or card_expired(*expiry, today=self.today):
            self.add_error('expiry_date', _('Expiry date must be in MM/YY format and not expired'))

        cvv = cleaned_data.get('cvv', '')
        if not cvv:
            self.add_error('cvv', _('CVV is required'))
        elif not re.fullmatch(r'[0-9]{3,4}', cvv):
            self.add_error('cvv', _('CVV must be 3 or 4 digits'))

        return cleaned_data
