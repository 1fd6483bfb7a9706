"""
Views for the booking wizard and its live price quote.
"""

from django.conf import settings
from django.contrib import messages
from django.shortcuts import redirect, render
from django.urls import reverse
from django.utils.http import urlencode
from django.utils.translation import gettext_lazy as _
from django.views.generic import View
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.cars.services import VehicleService
from apps.cars.views import render_vehicle_status
from apps.core.api import ApiStatus
from apps.payments.forms import PaymentForm
from .forms import BookingDatesForm, PersonalInfoForm
from .serializers import QuoteRequestSerializer
from .services import ReservationService
from .utils import calculate_rental_cost
from .wizard import DATE_FIELDS, STEP_TITLES, BookingWizard, Step, WizardStore


def load_bookable_vehicle(request, pk):
    """
    Returns: (vehicle, error_response). Exactly one of the two is None.
    """
    result = VehicleService().get(pk)
    if result.status == ApiStatus.NOT_FOUND:
        return None, render_vehicle_status(
            request, _('Vehicle Not Found'),
            _("The vehicle you're trying to book doesn't exist."), status=404
        )
    if not result.ok:
        return None, render_vehicle_status(
            request, _('Error Loading Vehicle'), result.error, status=502
        )

    vehicle = result.data
    if not vehicle.availability:
        return None, render_vehicle_status(
            request, _('Vehicle Unavailable'),
            _('This vehicle is currently not available for booking.'), status=200
        )
    return vehicle, None


def with_query(request, url):
    """url with the current request's query string appended."""
    query = request.GET.urlencode()
    return f"{url}?{query}" if query else url


class BookingWizardView(View):
    """
    Multi-step booking for one vehicle.

    Every POST stores the submitted step, performs the action and redirects
    back here, so refreshing never re-submits a step.
    """
    template_name = 'bookings/booking_wizard.html'
    confirmed_template_name = 'bookings/booking_confirmed.html'

    def get(self, request, pk):
        vehicle, error_response = load_bookable_vehicle(request, pk)
        if error_response is not None:
            return error_response

        store = WizardStore(request.session)
        draft = store.load(vehicle.id)
        if draft is None:
            draft = store.start(vehicle.id, {name: request.GET.get(name) for name in DATE_FIELDS})

        if draft.confirmed:
            store.discard()
            return self.render_confirmation(request, vehicle, draft)

        wizard = BookingWizard(draft)
        wizard.apply_profile(request.auth_session.user)
        store.save(draft)
        return render(request, self.template_name, self.get_context_data(vehicle, wizard))

    def post(self, request, pk):
        vehicle, error_response = load_bookable_vehicle(request, pk)
        if error_response is not None:
            return error_response

        store = WizardStore(request.session)
        draft = store.load(vehicle.id)
        if draft is None:
            messages.info(request, _('Your booking session expired. Please start again.'))
            return redirect(self.wizard_url(request, vehicle.id))

        action = request.POST.get('action', 'next')
        if action == 'restart':
            store.discard()
            return redirect(self.wizard_url(request, vehicle.id))
        if draft.submitting:
            # Another request is confirming this draft; leave its state alone
            messages.info(request, _('Your booking is already being submitted.'))
            return redirect(self.wizard_url(request, vehicle.id))

        def persist(changed):
            # Written through immediately so concurrent requests see the in-flight flag
            if store.save(changed):
                request.session.save()

        wizard = BookingWizard(draft, on_change=persist)
        wizard.update(request.POST)

        if action == 'back':
            wizard.back()
        elif action == 'confirm' or (action == 'next' and wizard.step == Step.PAYMENT):
            success, message = wizard.confirm(
                request.auth_session.user, vehicle, ReservationService()
            )
            if message:
                if success:
                    messages.success(request, message)
                else:
                    messages.error(request, message)
        else:
            wizard.advance()

        store.save(draft)
        return redirect(self.wizard_url(request, vehicle.id))

    @staticmethod
    def wizard_url(request, vehicle_id):
        return with_query(request, reverse('bookings:booking', kwargs={'pk': vehicle_id}))

    def get_context_data(self, vehicle, wizard):
        draft = wizard.draft
        step = wizard.step
        total_days, total_cost = wizard.rental_summary(vehicle.price)
        return {
            'vehicle': vehicle,
            'draft': draft,
            'step': int(step),
            'steps': [(int(number), title) for number, title in STEP_TITLES],
            'step_form': self.step_form(wizard),
            'errors': draft.errors,
            'total_days': total_days,
            'total_cost': total_cost,
            'signed_in': self.request.auth_session.is_authenticated,
            'login_url': reverse('login') + '?' + urlencode(
                {'redirect': self.wizard_url(self.request, vehicle.id)}
            ),
            'back_url': with_query(
                self.request, reverse('cars:vehicle_detail', kwargs={'pk': vehicle.id})
            ),
            'quote_url': reverse('bookings:booking_quote', kwargs={'pk': vehicle.id}),
        }

    @staticmethod
    def step_form(wizard):
        """Unbound form pre-filled from the draft; errors come from draft.errors."""
        draft = wizard.draft
        if wizard.step == Step.PERSONAL_INFO:
            return PersonalInfoForm(initial=draft.personal)
        if wizard.step == Step.DATES:
            return BookingDatesForm(initial=draft.dates)
        if wizard.step == Step.PAYMENT:
            return PaymentForm(initial=draft.payment)
        return None

    def render_confirmation(self, request, vehicle, draft):
        total_days, total_cost = calculate_rental_cost(
            draft.dates.get('pickup_date'), draft.dates.get('dropoff_date'), vehicle.price
        )
        delay = settings.RENT_A_CAR['BOOKING_REDIRECT_DELAY']
        return render(request, self.confirmed_template_name, {
            'vehicle': vehicle,
            'draft': draft,
            'total_days': total_days,
            'total_cost': total_cost,
            'redirect_url': reverse('user'),
            'redirect_delay': delay,
        })


class BookingQuoteView(APIView):
    """Live price for the dates step: total days and cost for a date range."""

    def get(self, request, pk):
        serializer = QuoteRequestSerializer(data=request.query_params)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = VehicleService().get(pk)
        if result.status == ApiStatus.NOT_FOUND:
            return Response({'detail': result.error}, status=status.HTTP_404_NOT_FOUND)
        if not result.ok:
            return Response({'detail': result.error}, status=status.HTTP_502_BAD_GATEWAY)

        vehicle = result.data
        total_days, total_cost = calculate_rental_cost(
            serializer.validated_data.get('pickup_date'),
            serializer.validated_data.get('dropoff_date'),
            vehicle.price
        )
        return Response({
            'total_days': total_days,
            'daily_rate': float(vehicle.price),
            'total_cost': float(total_cost),
        })
