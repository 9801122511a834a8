"""Link users to their organization profile."""

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    dependencies = [
        ("authentication", "0001_initial"),
        ("organizations", "0001_initial"),
    ]

    operations = [
        migrations.AddField(
            model_name="user",
            name="organization_profile",
            field=models.ForeignKey(
                blank=True,
                help_text="Organization profile (organization accounts only)",
                null=True,
                on_delete=django.db.models.deletion.SET_NULL,
                related_name="users",
                to="organizations.organizationprofile",
            ),
        ),
    ]
