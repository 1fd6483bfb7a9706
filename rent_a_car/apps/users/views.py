"""
Views for sign in, registration and the user profile.
"""

from django.contrib import messages
from django.shortcuts import redirect, render
from django.urls import reverse
from django.utils.http import url_has_allowed_host_and_scheme, urlencode
from django.utils.translation import gettext_lazy as _
from django.views.decorators.http import require_http_methods
from django.views.generic import TemplateView

from apps.bookings.services import ReservationService
from .forms import LoginForm, RegisterForm
from .services import authenticate


def safe_redirect_target(request, default='home'):
    """The ?redirect= target when it stays on this site, else the default route."""
    target = request.POST.get('redirect') or request.GET.get('redirect')
    if target and url_has_allowed_host_and_scheme(
        target, allowed_hosts={request.get_host()}, require_https=request.is_secure()
    ):
        return target
    return reverse(default)


def login_url_for(request) -> str:
    return reverse('login') + '?' + urlencode({'redirect': request.get_full_path()})


@require_http_methods(["GET", "POST"])
def login_view(request):
    """Handle user login."""
    if request.auth_session.is_authenticated:
        return redirect(safe_redirect_target(request))

    if request.method == 'POST':
        form = LoginForm(request.POST)
        if form.is_valid():
            user, token, error = authenticate(
                form.cleaned_data['identifier'],
                form.cleaned_data['password']
            )
            if user is not None:
                request.auth_session.login(user, token)
                messages.success(request, _('Logged in successfully!'))
                return redirect(safe_redirect_target(request))

            messages.error(request, error or _('Login failed'))
            form.add_error(None, error or _('Login failed'))
    else:
        form = LoginForm()

    return render(request, 'users/login.html', {
        'form': form,
        'redirect_to': request.GET.get('redirect', ''),
    })


@require_http_methods(["GET", "POST"])
def register_view(request):
    """Registration always succeeds; there is no account store behind it."""
    if request.method == 'POST':
        form = RegisterForm(request.POST)
        if form.is_valid():
            messages.success(
                request,
                _('Account created successfully! You can now log in.')
            )
            return redirect('login')
    else:
        form = RegisterForm()

    return render(request, 'users/register.html', {'form': form})


def logout_view(request):
    """Handle user logout."""
    request.auth_session.logout()
    messages.success(request, _('Logged out successfully!'))
    return redirect('home')


class ProfileView(TemplateView):
    """Identity details and the user's reservations."""
    template_name = 'users/profile.html'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        user = self.request.auth_session.user
        context['profile_user'] = user
        context['reservations'] = []
        context['reservations_error'] = ''
        if user is None:
            context['login_url'] = login_url_for(self.request)
            return context

        result = ReservationService().list_for_user(user.id)
        if result.ok:
            context['reservations'] = result.data
        else:
            context['reservations_error'] = result.error
        return context


@require_http_methods(["POST"])
def delete_reservation_view(request, reservation_id):
    """Delete one of the signed-in user's reservations."""
    user = request.auth_session.user
    if user is None:
        messages.error(request, _('Please log in to manage your reservations'))
        return redirect(reverse('login') + '?' + urlencode({'redirect': reverse('user')}))

    service = ReservationService()
    owned = service.list_for_user(user.id)
    if not owned.ok:
        messages.error(request, _('Failed to load reservations: %(detail)s') % {'detail': owned.error})
        return redirect('user')

    if not any(str(r['id']) == str(reservation_id) for r in owned.data):
        messages.error(request, _('Reservation not found'))
        return redirect('user')

    result = service.delete(reservation_id)
    if result.ok:
        messages.success(request, _('Reservation deleted'))
    else:
        messages.error(request, _('Failed to delete reservation: %(detail)s') % {'detail': result.error})
    return redirect('user')
