from django.urls import include, path

urlpatterns = [
    path('', include('simulator.urls')),
]
