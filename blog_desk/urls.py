"""
URL configuration for blog-desk.

Include in your project urls.py:

    path('blog/', include('blog_desk.urls')),
"""
from django.urls import path

from . import views

app_name = "blog_desk"

urlpatterns = [
    # Screen
    path("", views.PostListView.as_view(), name="post_list"),
    path("new/", views.PostCreateView.as_view(), name="post_create"),
    path("<int:pk>/delete/", views.PostDeleteView.as_view(), name="post_delete"),

    # JSON API
    path("api/posts/", views.PostCollectionApiView.as_view(), name="api_posts"),
    path("api/posts/<int:pk>/", views.PostApiDetailView.as_view(), name="api_post_detail"),
    path("api/media/", views.MediaUploadApiView.as_view(), name="api_media"),
]
