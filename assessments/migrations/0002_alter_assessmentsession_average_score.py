from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("assessments", "0001_initial"),
    ]

    operations = [
        migrations.AlterField(
            model_name="assessmentsession",
            name="average_score",
            field=models.FloatField(blank=True, null=True),
        ),
    ]
