# Generated manually for the expenses table

import uuid
from decimal import Decimal
import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('sales', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Expense',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('expense_type', models.CharField(choices=[('logistics', 'Logistics'), ('farmer_payment', 'Farmer Payment'), ('admin', 'Admin'), ('packaging', 'Packaging'), ('marketing', 'Marketing'), ('other', 'Other')], max_length=20)),
                ('date', models.DateField()),
                ('amount', models.DecimalField(decimal_places=2, max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))])),
                ('paid_to', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('receipt_url', models.URLField(blank=True, max_length=500)),
                ('is_approved', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('related_order', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='expenses', to='sales.salesorder')),
            ],
            options={
                'db_table': 'expenses',
                'ordering': ['-date', 'created_at'],
                'indexes': [
                    models.Index(fields=['-date'], name='expenses_date_idx'),
                    models.Index(fields=['expense_type'], name='expenses_type_idx'),
                    models.Index(fields=['is_approved', 'amount'], name='expenses_approval_idx'),
                ],
            },
        ),
    ]
