from django.urls import path
from . import views

app_name = 'proposals'

urlpatterns = [
    path('', views.proposal_collection, name='list'),
    path('<uuid:proposal_id>/', views.proposal_detail, name='detail'),
]
