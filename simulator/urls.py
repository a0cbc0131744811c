from django.urls import path
from . import views

urlpatterns = [
    # NFA simulation
    path('api/simulate-nfa/', views.simulate_nfa, name='simulate_nfa'),
    path('api/simulate-nfa-stream/', views.simulate_nfa_stream, name='simulate_nfa_stream'),

    # Property checking
    path('api/check-fsa-properties/', views.check_fsa_properties, name='check_fsa_properties'),
]
