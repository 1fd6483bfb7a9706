"""
Forms for sign in and registration.
"""

from django import forms
from django.utils.translation import gettext_lazy as _

PASSWORD_MIN_LENGTH = 8


class LoginForm(forms.Form):
    """Form for user login."""

    identifier = forms.CharField(
        label=_('Username or email'),
        max_length=150,
        error_messages={'required': _('Username or email is required')},
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': 'Username or Email'
        })
    )
    password = forms.CharField(
        label=_('Password'),
        min_length=PASSWORD_MIN_LENGTH,
        error_messages={
            'required': _('Password must be at least 8 characters'),
            'min_length': _('Password must be at least 8 characters'),
        },
        widget=forms.PasswordInput(attrs={
            'class': 'form-control',
            'placeholder': 'Password'
        })
    )


class RegisterForm(forms.Form):
    """Registration; accepted without creating an account anywhere."""

    first_name = forms.CharField(
        label=_('First name'),
        min_length=2,
        error_messages={
            'required': _('First name must be at least 2 characters'),
            'min_length': _('First name must be at least 2 characters'),
        },
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'John'})
    )
    last_name = forms.CharField(
        label=_('Last name'),
        min_length=2,
        error_messages={
            'required': _('Last name must be at least 2 characters'),
            'min_length': _('Last name must be at least 2 characters'),
        },
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Doe'})
    )
    email = forms.EmailField(
        label=_('Email'),
        error_messages={
            'required': _('Email is required'),
            'invalid': _('Please enter a valid email'),
        },
        widget=forms.EmailInput(attrs={'class': 'form-control', 'placeholder': 'john.doe@example.com'})
    )
    password = forms.CharField(
        label=_('Password'),
        min_length=PASSWORD_MIN_LENGTH,
        error_messages={
            'required': _('Password must be at least 8 characters'),
            'min_length': _('Password must be at least 8 characters'),
        },
        widget=forms.PasswordInput(attrs={'class': 'form-control', 'placeholder': 'Password'})
    )
    confirm_password = forms.CharField(
        label=_('Confirm password'),
        min_length=PASSWORD_MIN_LENGTH,
        error_messages={
            'required': _('Please confirm your password'),
            'min_length': _('Please confirm your password'),
        },
        widget=forms.PasswordInput(attrs={'class': 'form-control', 'placeholder': 'Confirm Password'})
    )

    def clean(self):
        cleaned_data = super().clean()
        password = cleaned_data.get('password')
        confirm_password = cleaned_data.get('confirm_password')

        if password and confirm_password and password != confirm_password:
            self.add_error('confirm_password', _('Passwords do not match'))

        return cleaned_data
