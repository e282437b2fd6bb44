from django.urls import path
from . import views

app_name = 'stores'

urlpatterns = [
    # GET  /api/store/ - Get store
    # POST /api/store/ - Onboard (create store, seed inventory categories)
    # PUT  /api/store/ - Replace store profile
    path('', views.store, name='store'),
]
