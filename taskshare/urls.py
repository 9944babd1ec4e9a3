from django.urls import path
from taskshare.views.task import TaskListView, DelegatedTaskListView, TaskHistoryView, TaskDetailView
from taskshare.views.health import HealthView
from taskshare.views.team import TeamMembersView
from taskshare.views.auth import GoogleLoginView, GoogleCallbackView, CurrentUserView, LogoutView

urlpatterns = [
    path("tasks", TaskListView.as_view(), name="tasks"),
    path("tasks/assigned", DelegatedTaskListView.as_view(), name="delegated_tasks"),
    path("tasks/history", TaskHistoryView.as_view(), name="task_history"),
    path("tasks/<str:task_id>", TaskDetailView.as_view(), name="task_detail"),
    path("team", TeamMembersView.as_view(), name="team"),
    path("health", HealthView.as_view(), name="health"),
    path("auth/google", GoogleLoginView.as_view(), name="google_login"),
    path("auth/google/callback", GoogleCallbackView.as_view(), name="google_callback"),
    path("auth/user", CurrentUserView.as_view(), name="current_user"),
    path("auth/logout", LogoutView.as_view(), name="logout"),
]
