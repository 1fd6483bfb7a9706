"""
Views for browsing vehicles.
"""

from django.shortcuts import render
from django.urls import reverse
from django.utils.http import urlencode
from django.utils.translation import gettext_lazy as _
from django.views.generic import TemplateView

from apps.core.api import ApiStatus
from .forms import VehicleFilterForm
from .query import PAGE_PARAM, VehicleSearchService, query_string, search_params
from .services import VehicleService


class VehicleListView(TemplateView):
    """Filterable, paginated vehicle list; all state is in the query string."""
    template_name = 'cars/vehicle_list.html'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        params = self.request.GET
        results = VehicleSearchService().search(params)
        page_obj = results['page']

        context['vehicles'] = page_obj.object_list
        context['page_obj'] = page_obj
        context['total'] = results['total']
        context['error'] = results['error']
        context['filter_form'] = VehicleFilterForm(params, options=results['options'])
        context['search_params'] = search_params(params)
        context['reset_url'] = reverse('cars:vehicle_list')

        # Links carry every parameter and change only the page
        if page_obj.has_previous():
            context['prev_url'] = '?' + query_string(params, **{PAGE_PARAM: page_obj.previous_page_number()})
        if page_obj.has_next():
            context['next_url'] = '?' + query_string(params, **{PAGE_PARAM: page_obj.next_page_number()})

        context['current_query'] = params.urlencode()
        return context


class VehicleDetailView(TemplateView):
    """Single vehicle with a link to the booking wizard."""
    template_name = 'cars/vehicle_detail.html'

    def get(self, request, *args, **kwargs):
        result = VehicleService().get(kwargs['pk'])
        if result.status == ApiStatus.NOT_FOUND:
            return render_vehicle_status(
                request, _('Vehicle Not Found'),
                _("The vehicle you're looking for doesn't exist."), status=404
            )
        if not result.ok:
            return render_vehicle_status(
                request, _('Error Loading Vehicle'), result.error, status=502
            )

        context = self.get_context_data(vehicle=result.data, **kwargs)
        return self.render_to_response(context)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        vehicle = context['vehicle']
        query = self.request.GET.urlencode()
        suffix = f"?{query}" if query else ''

        context['back_url'] = reverse('cars:vehicle_list') + suffix
        context['book_url'] = reverse('bookings:booking', kwargs={'pk': vehicle.id}) + suffix
        context['login_url'] = reverse('login') + '?' + urlencode(
            {'redirect': self.request.get_full_path()}
        )
        return context


def render_vehicle_status(request, title, message, status):
    """Status page for a vehicle that cannot be shown or booked."""
    return render(request, 'cars/vehicle_status.html', {
        'title': title,
        'message': message,
        'list_url': reverse('cars:vehicle_list'),
    }, status=status)
