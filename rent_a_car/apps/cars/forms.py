"""
Forms for the vehicle search and the vehicle list filters.
"""

from django import forms
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from apps.bookings.forms import time_select
from apps.bookings.utils import combine_datetime
from .query import FilterCriteria, PAGE_PARAM, SEARCH_PARAMS, vehicle_list_url

DEFAULT_LOCATION = 'Split, Croatia'


class SearchForm(forms.Form):
    """Landing page search: where and when."""
    pickup_location = forms.CharField(
        label=_('Pick up location'),
        max_length=255,
        initial=DEFAULT_LOCATION,
        error_messages={'required': _('Pick up location is required')},
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    return_location = forms.CharField(
        label=_('Return location'),
        max_length=255,
        initial=DEFAULT_LOCATION,
        error_messages={'required': _('Return location is required')},
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    pickup_date = forms.DateField(
        label=_('Pick up date'),
        error_messages={'required': _('Pick up date is required')},
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'})
    )
    pickup_time = forms.TimeField(
        label=_('Pick up time'),
        error_messages={'required': _('Pick up time is required')},
        widget=time_select()
    )
    dropoff_date = forms.DateField(
        label=_('Drop off date'),
        error_messages={'required': _('Drop off date is required')},
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'})
    )
    dropoff_time = forms.TimeField(
        label=_('Drop off time'),
        error_messages={'required': _('Drop off time is required')},
        widget=time_select()
    )

    def __init__(self, *args, on_submit=None, now=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.on_submit = on_submit
        self.now = now or timezone.now()

    def clean(self):
        cleaned_data = super().clean()
        pickup = combine_datetime(cleaned_data.get('pickup_date'), cleaned_data.get('pickup_time'))
        dropoff = combine_datetime(cleaned_data.get('dropoff_date'), cleaned_data.get('dropoff_time'))

        if dropoff and dropoff <= self.now:
            self.add_error('dropoff_time', _('Drop off date and time cannot be in the past'))

        if pickup and dropoff and dropoff <= pickup:
            self.add_error('dropoff_date', _('Drop off must be after pick up'))

        return cleaned_data

    def search_params(self):
        data = self.cleaned_data
        return {
            'pickup_location': data['pickup_location'],
            'return_location': data['return_location'],
            'pickup_date': data['pickup_date'].isoformat(),
            'pickup_time': data['pickup_time'].strftime('%H:%M'),
            'dropoff_date': data['dropoff_date'].isoformat(),
            'dropoff_time': data['dropoff_time'].strftime('%H:%M'),
        }

    def submit(self, extra_params=None):
        """
        Hand a valid search to the on_submit callable, or build the vehicle
        list URL for it. Other parameters in extra_params (filters) are kept;
        the page is reset.
        """
        params = self.search_params()
        if self.on_submit is not None:
            return self.on_submit(params)

        query = {
            key: value for key, value in (extra_params or {}).items()
            if key not in SEARCH_PARAMS and key != PAGE_PARAM and value
        }
        query.update(params)
        return vehicle_list_url(query)


def any_select(choices=(), label=_('Any')):
    return forms.Select(
        choices=[('', label)] + list(choices),
        attrs={'class': 'form-control'}
    )


class VehicleFilterForm(forms.Form):
    """
    Vehicle list filters.

    Every field is optional and a value that fails to parse is ignored, so
    a hand-edited query string never breaks the list.
    """
    AVAILABILITY_CHOICES = [
        ('true', _('Available')),
        ('false', _('Unavailable')),
    ]

    fuel = forms.CharField(label=_('Fuel'), required=False, widget=any_select())
    doors = forms.IntegerField(label=_('Doors'), required=False, min_value=1, widget=any_select())
    make = forms.CharField(label=_('Make'), required=False, widget=any_select())
    model = forms.CharField(label=_('Model'), required=False, widget=any_select())
    color = forms.CharField(label=_('Color'), required=False, widget=any_select())
    year = forms.IntegerField(label=_('Year'), required=False, widget=any_select())
    availability = forms.ChoiceField(
        label=_('Availability'),
        required=False,
        choices=[('', _('Any'))] + AVAILABILITY_CHOICES,
        widget=forms.Select(attrs={'class': 'form-control'})
    )
    min_price = forms.DecimalField(
        label=_('Min price'),
        required=False,
        min_value=0,
        widget=forms.NumberInput(attrs={'class': 'form-control', 'min': 0, 'placeholder': '0'})
    )
    max_price = forms.DecimalField(
        label=_('Max price'),
        required=False,
        min_value=0,
        widget=forms.NumberInput(attrs={'class': 'form-control', 'min': 0})
    )

    def __init__(self, *args, options=None, **kwargs):
        super().__init__(*args, **kwargs)
        for name, values in (options or {}).items():
            if name in self.fields:
                self.fields[name].widget.choices = [('', _('Any'))] + [
                    (str(value), value) for value in values
                ]

    def criteria(self) -> FilterCriteria:
        # Fields that failed validation are absent from cleaned_data
        self.is_valid()
        data = self.cleaned_data

        def present(name):
            value = data.get(name)
            return None if value in (None, '') else value

        availability = present('availability')
        return FilterCriteria(
            fuel=present('fuel'),
            doors=present('doors'),
            make=present('make'),
            model=present('model'),
            color=present('color'),
            year=present('year'),
            availability=None if availability is None else availability == 'true',
            min_price=present('min_price'),
            max_price=present('max_price'),
        )
