from adapters.web.handlers import public, auth, admin

route_tables = [
    public.routes,
    auth.routes,
    admin.routes,
]
