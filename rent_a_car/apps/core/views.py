"""
Views for the marketing pages.
"""

from django.shortcuts import redirect, render
from django.views.generic import TemplateView

from apps.cars.forms import SearchForm
from .content import ABOUT, CONTACT


class HomeView(TemplateView):
    """Landing page with the vehicle search form."""
    template_name = 'core/home.html'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context.setdefault('search_form', SearchForm())
        return context

    def post(self, request, *args, **kwargs):
        form = SearchForm(request.POST)
        if form.is_valid():
            # Filters already in the query string survive a new search
            return redirect(form.submit(request.GET))
        return self.render_to_response(self.get_context_data(search_form=form))


class AboutView(TemplateView):
    template_name = 'core/about.html'
    extra_context = {'about': ABOUT}


class ContactView(TemplateView):
    template_name = 'core/contact.html'
    extra_context = {'contact': CONTACT}


def page_not_found(request, exception=None):
    return render(request, 'core/404.html', status=404)
