import django.core.validators
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Shipment",
            fields=[
                ("id",            models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("barcode",       models.CharField(db_index=True, max_length=64)),
                ("phone",         models.CharField(blank=True, db_index=True, max_length=32)),
                ("customer_name", models.CharField(blank=True, max_length=120)),
                ("quantity",      models.PositiveIntegerField(
                    default=1, validators=[django.core.validators.MinValueValidator(1)],
                )),
                ("weight",        models.DecimalField(
                    decimal_places=2, default=0, max_digits=10,
                    validators=[django.core.validators.MinValueValidator(0)],
                )),
                ("price",         models.DecimalField(
                    decimal_places=2, default=0, max_digits=12,
                    validators=[django.core.validators.MinValueValidator(0)],
                )),
                ("paid_amount",   models.DecimalField(
                    decimal_places=2, default=0, max_digits=12,
                    validators=[django.core.validators.MinValueValidator(0)],
                )),
                ("balance",         models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("status",          models.CharField(default="pending", max_length=20)),
                ("delivery_status", models.CharField(default="warehouse", max_length=20)),
                ("location",        models.CharField(
                    choices=[("warehouse", "Warehouse"), ("delivery", "Delivery")],
                    default="warehouse",
                    max_length=20,
                )),
                ("arrival_date",  models.DateField(blank=True, default=django.utils.timezone.localdate, null=True)),
                ("notes",         models.TextField(blank=True)),
                ("delivery_note", models.TextField(blank=True)),
                ("courier",       models.CharField(blank=True, max_length=120)),
                ("delivered_at",  models.DateTimeField(blank=True, null=True)),
                ("created_at",    models.DateTimeField(auto_now_add=True)),
                ("updated_at",    models.DateTimeField(auto_now=True)),
            ],
            options={"ordering": ["-arrival_date", "-id"]},
        ),
        migrations.AddIndex(
            model_name="shipment",
            index=models.Index(fields=["status"], name="ship_status_idx"),
        ),
        migrations.AddIndex(
            model_name="shipment",
            index=models.Index(fields=["location"], name="ship_location_idx"),
        ),
        migrations.AddIndex(
            model_name="shipment",
            index=models.Index(fields=["arrival_date"], name="ship_arrival_idx"),
        ),
    ]
