from .settings_handlers import forbidden, save_settings, settings_page


def setup_settings_routes(app, settings_factory, authorize=None):
    """Register the settings page routes; `settings_factory()` builds a fresh Settings per request.

    `authorize(request)`, when given, gates both routes; a falsy result answers 403.
    """

    def show_settings(request):
        settings = settings_factory()
        if authorize is not None and not authorize(request):
            return forbidden(request, settings)
        return settings_page(request, settings)

    async def submit_settings(request):
        settings = settings_factory()
        if authorize is not None and not authorize(request):
            return forbidden(request, settings)
        return await save_settings(request, settings)

    app.get("/settings")(show_settings)
    app.post("/settings/save")(submit_settings)
