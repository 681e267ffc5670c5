# ==========================================
# apps/groups/models.py
# ==========================================

from django.db import models
import uuid


class Group(models.Model):
    """Circle of people (e.g. a family) sharing a set of cars."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    members = models.ManyToManyField(
        'accounts.User',
        through='GroupMembership',
        related_name='member_groups',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'groups'
        ordering = ['name', 'created_at']

    def __str__(self):
        return self.name

    def has_member(self, user):
        return self.memberships.filter(user=user).exists()

    def member_emails(self):
        return set(self.memberships.values_list('user__email', flat=True))


class GroupMembership(models.Model):
    """User membership in a group."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='group_memberships')
    group = models.ForeignKey(Group, on_delete=models.CASCADE, related_name='memberships')
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'group_memberships'
        unique_together = [['user', 'group']]
        indexes = [
            models.Index(fields=['user', 'joined_at'], name='memberships_user_joined_idx'),
        ]
        ordering = ['joined_at']

    def __str__(self):
        return f"{self.user.get_full_name()} in {self.group.name}"


class Invitation(models.Model):
    """Pending invitation of an email address into a group."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(max_length=255, db_index=True)
    group = models.ForeignKey(Group, on_delete=models.CASCADE, related_name='invitations')
    # Name at the time of inviting, shown to the invitee
    group_name = models.CharField(max_length=200)
    invited_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='sent_invitations',
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'invitations'
        indexes = [
            models.Index(fields=['email', 'created_at'], name='invitations_email_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.email} -> {self.group_name}"
