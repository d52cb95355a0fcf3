import logging
from urllib.parse import urlencode

from django.conf import settings
from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin, UserPassesTestMixin
from django.http import Http404, HttpResponseNotAllowed, QueryDict
from django.shortcuts import redirect, render
from django.urls import reverse
from django.views import View

from penduduk.api.views import PendudukRetrieveView
from penduduk.exceptions import PendudukNotFound, PendudukValidationError
from penduduk.models import Penduduk
from penduduk.services.penduduk_service import PendudukService
from penduduk.web.state import PanelState

logger = logging.getLogger(__name__)

retrieve_view = PendudukRetrieveView.as_view()

FORM_SESSION_KEY = "penduduk_form"
UNSTORED_INPUTS = ("password", "csrfmiddlewaretoken", "_method", "search")
INVALID_FORM_MESSAGE = "Data penduduk tidak valid. Periksa kembali isian formulir."


class AdminRequiredMixin(LoginRequiredMixin, UserPassesTestMixin):
    """Anonymous users go to the login page; signed-in non-admins get 403."""

    def test_func(self):
        return getattr(self.request.user, "is_admin", False)


def form_data(request):
    """Submitted fields for POST as well as form-encoded PUT/DELETE bodies."""
    if request.method == "POST":
        return request.POST
    return QueryDict(request.body, encoding=request.encoding)


def list_url(**params):
    url = reverse("penduduk-list")
    params = {key: value for key, value in params.items() if value not in (None, "")}
    return f"{url}?{urlencode(params)}" if params else url


def stash_form_errors(request, modal, penduduk_id, data, errors):
    """Keep the rejected input around for the redirected GET that re-opens the modal."""
    draft = {key: value for key, value in data.items() if key not in UNSTORED_INPUTS}
    request.session[FORM_SESSION_KEY] = {
        "modal": modal,
        "id": penduduk_id,
        "draft": draft,
        "errors": errors,
    }


class PendudukListView(AdminRequiredMixin, View):
    """
    Admin page listing penduduk records.

    GET  /admin/penduduk/?search=&page=&modal=add|edit|delete&id=
    POST /admin/penduduk/   create a penduduk and its account
    """

    template_name = "penduduk/list.html"

    def get(self, request):
        service = PendudukService()
        search = request.GET.get("search", "").strip()

        page_obj = service.list_penduduk(search or None, request.GET.get("page") or 1)

        context = {
            "page_obj": page_obj,
            "penduduk_list": page_obj.object_list,
            "search": search,
            "search_query": urlencode({"search": search}) if search else "",
            "stats": service.get_stats(search or None),
            "panel": self._panel_state(request, service),
            "jenis_kelamin_choices": Penduduk.JENIS_KELAMIN_CHOICES,
            "debounce_ms": settings.PENDUDUK_SEARCH_DEBOUNCE_MS,
            "list_url": reverse("penduduk-list"),
        }
        return render(request, self.template_name, context)

    def post(self, request):
        service = PendudukService()
        try:
            service.create_penduduk(request.POST, actor=request.user, request=request)
        except PendudukValidationError as e:
            stash_form_errors(request, "add", None, request.POST, e.errors)
            messages.error(request, INVALID_FORM_MESSAGE)
            return redirect(list_url(search=request.POST.get("search", "").strip(), modal="add"))

        messages.success(request, "Penduduk berhasil ditambahkan.")
        return redirect("penduduk-list")

    def _panel_state(self, request, service):
        panel = PanelState(settings.PENDUDUK_DEFAULT_NATIONALITY)
        stashed = request.session.pop(FORM_SESSION_KEY, None)
        modal = request.GET.get("modal")

        if modal == "add":
            panel.open_add()
        elif modal in ("edit", "delete"):
            try:
                penduduk = service.get_penduduk(request.GET.get("id"))
            except PendudukNotFound:
                return panel
            if modal == "edit":
                panel.open_edit(penduduk)
            else:
                panel.open_delete(penduduk)

        if stashed and stashed["modal"] == modal and panel.mode in (
            PanelState.ADDING,
            PanelState.EDITING,
        ):
            panel.fail(stashed["draft"], stashed["errors"])
        return panel


class PendudukDetailView(AdminRequiredMixin, View):
    """
    Single penduduk record.

    GET    /admin/penduduk/<id>/   JSON representation
    PUT    /admin/penduduk/<id>/   update (also POST with _method=PUT)
    DELETE /admin/penduduk/<id>/   delete with its account (also POST with _method=DELETE)
    """

    def get(self, request, pk):
        return retrieve_view(request, pk=pk)

    def post(self, request, pk):
        method = request.POST.get("_method", "").upper()
        if method == "PUT":
            return self.put(request, pk)
        if method == "DELETE":
            return self.delete(request, pk)
        return HttpResponseNotAllowed(["GET", "PUT", "DELETE"])

    def put(self, request, pk):
        data = form_data(request)
        try:
            PendudukService().update_penduduk(pk, data, actor=request.user, request=request)
        except PendudukNotFound:
            raise Http404(f"Penduduk {pk} not found")
        except PendudukValidationError as e:
            stash_form_errors(request, "edit", pk, data, e.errors)
            messages.error(request, INVALID_FORM_MESSAGE)
            return redirect(list_url(search=data.get("search", "").strip(), modal="edit", id=pk))

        messages.success(request, "Penduduk berhasil diperbarui.")
        return redirect("penduduk-list")

    def delete(self, request, pk):
        try:
            PendudukService().delete_penduduk(pk, actor=request.user, request=request)
        except PendudukNotFound:
            raise Http404(f"Penduduk {pk} not found")

        messages.success(request, "Penduduk berhasil dihapus.")
        return redirect("penduduk-list")
