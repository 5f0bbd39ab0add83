import uuid
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Customer',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('company_name', models.CharField(max_length=200)),
                ('contact_person', models.CharField(blank=True, max_length=200)),
                ('country', models.CharField(blank=True, max_length=100)),
                ('email', models.EmailField(blank=True, max_length=254)),
                ('phone', models.CharField(blank=True, max_length=50)),
                ('preferred_origin', models.CharField(choices=[('sidama', 'Sidama'), ('yirgacheffe', 'Yirgacheffe'), ('guji', 'Guji'), ('harrar', 'Harrar'), ('limu', 'Limu'), ('other', 'Other')], default='other', max_length=20)),
                ('certifications_required', models.JSONField(blank=True, default=list)),
                ('status', models.CharField(choices=[('lead', 'Lead'), ('active', 'Active'), ('repeat', 'Repeat'), ('dormant', 'Dormant')], default='lead', max_length=20)),
                ('assigned_sales_rep', models.CharField(blank=True, max_length=100)),
                ('notes', models.TextField(blank=True)),
                ('next_follow_up_date', models.DateField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'customers',
                'ordering': ['created_at'],
                'indexes': [
                    models.Index(fields=['status'], name='customers_status_idx'),
                    models.Index(fields=['preferred_origin'], name='customers_origin_idx'),
                    models.Index(fields=['next_follow_up_date'], name='customers_follow_up_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Interaction',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('date', models.DateField()),
                ('type', models.CharField(choices=[('call', 'Call'), ('sample', 'Sample'), ('email', 'Email'), ('meeting', 'Meeting')], max_length=20)),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('customer', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='interactions', to='crm.customer')),
            ],
            options={
                'db_table': 'customer_interactions',
                'ordering': ['created_at'],
                'indexes': [
                    models.Index(fields=['customer', 'created_at'], name='interactions_customer_idx'),
                ],
            },
        ),
    ]
