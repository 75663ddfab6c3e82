from django.urls import include, path

urlpatterns = [
    path('auth/', include('accounts.urls')),
    path('proposals/', include('proposals.urls')),
]

handler404 = 'config.middleware.not_found'
handler500 = 'config.middleware.server_error'
