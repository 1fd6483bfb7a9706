"""
Booking wizard: a linear, validation-gated flow from personal details to a
confirmed reservation.

    PERSONAL_INFO -> DATES -> REVIEW -> PAYMENT -> CONFIRMED

The draft lives in the session between requests; the wizard itself holds no
framework state so it can be driven directly in tests.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import IntEnum
from typing import Callable, Dict, Mapping, Optional, Tuple
import logging
import uuid

from django.utils import timezone
from django.utils.translation import gettext as _

from apps.payments.forms import PaymentForm, PaymentMethod
from apps.payments.utils import format_card_number, format_cvv, format_expiry
from .forms import BookingDatesForm, PersonalInfoForm, first_errors
from .utils import calculate_rental_cost, combine_datetime

logger = logging.getLogger(__name__)


class Step(IntEnum):
    PERSONAL_INFO = 1
    DATES = 2
    REVIEW = 3
    PAYMENT = 4
    CONFIRMED = 5


STEP_TITLES = [
    (Step.PERSONAL_INFO, 'Personal Info'),
    (Step.DATES, 'Booking Dates'),
    (Step.REVIEW, 'Review'),
    (Step.PAYMENT, 'Payment'),
]

PERSONAL_FIELDS = ('first_name', 'last_name', 'email', 'phone')
DATE_FIELDS = ('pickup_date', 'pickup_time', 'dropoff_date', 'dropoff_time')
PAYMENT_FIELDS = ('payment_method', 'card_number', 'card_name', 'expiry_date', 'cvv')

PAYMENT_FORMATTERS = {
    'card_number': format_card_number,
    'expiry_date': format_expiry,
    'cvv': format_cvv,
}


def _blank(fields):
    return lambda: dict.fromkeys(fields, '')


def _blank_payment():
    payment = dict.fromkeys(PAYMENT_FIELDS, '')
    payment['payment_method'] = PaymentMethod.CREDIT_CARD
    return payment


@dataclass
class BookingDraft:
    """Working state of one booking session."""
    vehicle_id: int
    token: str = field(default_factory=lambda: uuid.uuid4().hex)
    step: int = Step.PERSONAL_INFO
    personal: Dict[str, str] = field(default_factory=_blank(PERSONAL_FIELDS))
    dates: Dict[str, str] = field(default_factory=_blank(DATE_FIELDS))
    payment: Dict[str, str] = field(default_factory=_blank_payment)
    errors: Dict[str, str] = field(default_factory=dict)
    submitting: bool = False
    confirmed: bool = False
    reservation_id: Optional[str] = None

    @classmethod
    def start(cls, vehicle_id: int, initial_dates: Mapping = None) -> 'BookingDraft':
        draft = cls(vehicle_id=vehicle_id)
        for name in DATE_FIELDS:
            draft.dates[name] = (initial_dates or {}).get(name) or ''
        return draft

    @classmethod
    def from_dict(cls, data: Mapping) -> 'BookingDraft':
        return cls(**data)

    def to_dict(self) -> Dict:
        data = asdict(self)
        data['step'] = int(self.step)
        return data


class BookingWizard:
    """Drive a BookingDraft through the booking steps."""

    step_sections = {
        Step.PERSONAL_INFO: ('personal', PERSONAL_FIELDS),
        Step.DATES: ('dates', DATE_FIELDS),
        Step.PAYMENT: ('payment', PAYMENT_FIELDS),
    }

    def __init__(self, draft: BookingDraft, today=None,
                 on_change: Optional[Callable[[BookingDraft], object]] = None):
        self.draft = draft
        self.today = today
        self.on_change = on_change

    @property
    def step(self) -> Step:
        return Step(self.draft.step)

    def _notify(self):
        if self.on_change is not None:
            self.on_change(self.draft)

    def get_form(self, step: Step):
        """Bound form for a step, or None for the review step."""
        if step == Step.PERSONAL_INFO:
            return PersonalInfoForm(self.draft.personal)
        if step == Step.DATES:
            return BookingDatesForm(self.draft.dates)
        if step == Step.PAYMENT:
            return PaymentForm(self.draft.payment, today=self.today)
        return None

    def update(self, data: Mapping, step: Optional[Step] = None):
        """Store submitted values for a step; fields absent from data are left alone."""
        step = self.step if step is None else step
        if step not in self.step_sections:
            return
        section_name, fields = self.step_sections[step]
        section = getattr(self.draft, section_name)
        for name in fields:
            if name not in data:
                continue
            value = (data.get(name) or '').strip()
            formatter = PAYMENT_FORMATTERS.get(name) if section_name == 'payment' else None
            section[name] = formatter(value) if formatter else value

    def apply_profile(self, user):
        """
        Pre-fill personal info from the signed-in user.

        Values already entered win over the profile, so this is safe to call
        on every request, including after a late sign-in.
        """
        if user is None:
            return
        first_name, _sep, last_name = (user.name or '').partition(' ')
        profile = {
            'first_name': first_name,
            'last_name': last_name.strip(),
            'email': user.email or '',
            'phone': str(user.phone or ''),
        }
        for name, value in profile.items():
            if not self.draft.personal.get(name):
                self.draft.personal[name] = value

    def validate_step(self, step: Step) -> bool:
        self.draft.errors = {}
        form = self.get_form(step)
        if form is None or form.is_valid():
            return True
        self.draft.errors = first_errors(form)
        return False

    def advance(self) -> bool:
        if not self.validate_step(self.step):
            return False
        self.draft.step = min(self.draft.step + 1, Step.CONFIRMED)
        return True

    def back(self):
        self.draft.step = max(self.draft.step - 1, Step.PERSONAL_INFO)

    def rental_summary(self, daily_rate) -> Tuple[int, Decimal]:
        """Returns: (total_days, total_cost)"""
        return calculate_rental_cost(
            self.draft.dates.get('pickup_date'),
            self.draft.dates.get('dropoff_date'),
            daily_rate
        )

    def reservation_payload(self, user, vehicle, now: datetime = None) -> Dict:
        dates = self.draft.dates
        pickup = combine_datetime(dates['pickup_date'], dates['pickup_time'])
        dropoff = combine_datetime(dates['dropoff_date'], dates['dropoff_time'])
        return {
            'createdAt': (now or timezone.now()).isoformat(),
            'vehicle': vehicle.descriptor,
            'year': vehicle.year,
            'color': vehicle.color,
            'dailyRate': float(vehicle.price.quantize(Decimal('0.01'))),
            'pickup': pickup.isoformat(),
            'return': dropoff.isoformat(),
            'cardNumber': self.draft.payment.get('card_number', ''),
            'userId': user.id,
        }

    def confirm(self, user, vehicle, reservations, now: datetime = None) -> Tuple[bool, str]:
        """
        Submit the reservation.
        Returns: (success, message). The message is empty when the only
        problem is invalid payment fields, which are reported in draft.errors.
        """
        if self.draft.confirmed:
            return True, _('Booking confirmed successfully!')
        if self.draft.submitting:
            return False, _('Your booking is already being submitted.')
        if not self.validate_step(Step.PAYMENT):
            return False, ''
        if user is None:
            return False, _('Please log in to complete your booking')

        self.draft.submitting = True
        self._notify()
        try:
            result = reservations.create(self.reservation_payload(user, vehicle, now))
        finally:
            self.draft.submitting = False

        if not result.ok:
            logger.warning(f"Booking for vehicle {vehicle.id} failed: {result.error}")
            self._notify()
            return False, _('Failed to create reservation: %(detail)s') % {'detail': result.error}

        self.draft.confirmed = True
        self.draft.step = Step.CONFIRMED
        self.draft.reservation_id = str(result.data.get('id', '')) or None
        self._notify()
        logger.info(f"Booking confirmed for vehicle {vehicle.id} by user {user.id}")
        return True, _('Booking confirmed successfully!')


class WizardStore:
    """
    Session persistence for the single active booking draft.

    Starting a draft replaces (and thereby cancels) any previous one; saving a
    draft whose token is no longer active is a no-op.
    """
    SESSION_KEY = 'booking_draft'

    def __init__(self, session):
        self.session = session

    def load(self, vehicle_id: int) -> Optional[BookingDraft]:
        data = self.session.get(self.SESSION_KEY)
        if not data or data.get('vehicle_id') != vehicle_id:
            return None
        try:
            return BookingDraft.from_dict(data)
        except TypeError:
            logger.warning("Discarding unreadable booking draft from session")
            self.discard()
            return None

    def start(self, vehicle_id: int, initial_dates: Mapping = None) -> BookingDraft:
        draft = BookingDraft.start(vehicle_id, initial_dates)
        self.session[self.SESSION_KEY] = draft.to_dict()
        return draft

    def is_active(self, draft: BookingDraft) -> bool:
        data = self.session.get(self.SESSION_KEY)
        return bool(data) and data.get('token') == draft.token

    def save(self, draft: BookingDraft) -> bool:
        if not self.is_active(draft):
            logger.info(f"Ignoring update for cancelled booking draft {draft.token}")
            return False
        self.session[self.SESSION_KEY] = draft.to_dict()
        return True

    def discard(self):
        self.session.pop(self.SESSION_KEY, None)
