# Generated manually for the purchases app

import uuid
from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion


PURCHASE_TYPES = [
    ('service', 'Service'),
    ('materials', 'Materials'),
    ('products', 'Products'),
    ('indirect', 'Indirect'),
]

PAYMENT_STATUSES = [
    ('pending', 'Pending'),
    ('partial', 'Partial'),
    ('paid', 'Paid'),
]

FILE_TYPES = [
    ('invoice', 'Invoice'),
    ('receipt', 'Receipt'),
    ('photo', 'Photo'),
    ('document', 'Document'),
]

HOUSE_DOCUMENT_TYPES = [
    ('purchase_agreement', 'Purchase agreement'),
    ('utility_contract', 'Utility contract'),
    ('insurance', 'Insurance'),
    ('building_permit', 'Building permit'),
    ('tax_document', 'Tax document'),
    ('warranty', 'Warranty'),
    ('manual', 'Manual'),
    ('other', 'Other'),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('homes', '0001_initial'),
        ('suppliers', '0001_initial'),
        ('taxonomy', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Purchase',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('is_deleted', models.BooleanField(db_index=True, default=False)),
                ('date', models.DateField()),
                ('purchase_type', models.CharField(choices=PURCHASE_TYPES, max_length=20)),
                ('expense_category', models.CharField(blank=True, max_length=100, null=True)),
                ('total_amount', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12, validators=[MinValueValidator(Decimal('0.00'))])),
                ('currency', models.CharField(default='EUR', max_length=3)),
                ('payment_status', models.CharField(choices=PAYMENT_STATUSES, default='pending', max_length=20)),
                ('payment_due_date', models.DateField(blank=True, null=True)),
                ('notes', models.TextField(blank=True)),
                ('supplier', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='purchases', to='suppliers.supplier')),
                ('home', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='purchases', to='homes.home')),
                ('area', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='purchases', to='homes.area')),
                ('room', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='purchases', to='homes.room')),
            ],
            options={
                'db_table': 'purchases',
                'ordering': ['-date', '-created_at'],
                'indexes': [
                    models.Index(fields=['date'], name='purchases_date_idx'),
                    models.Index(fields=['supplier', 'date'], name='purchases_supplier_date_idx'),
                    models.Index(fields=['home'], name='purchases_home_idx'),
                    models.Index(fields=['expense_category'], name='purchases_category_idx'),
                    models.Index(fields=['payment_status'], name='purchases_status_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='PurchaseLineItem',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('position', models.PositiveIntegerField(default=0)),
                ('description', models.CharField(max_length=500)),
                ('brand', models.CharField(blank=True, max_length=255)),
                ('quantity', models.DecimalField(decimal_places=3, default=Decimal('1.000'), max_digits=10, validators=[MinValueValidator(Decimal('0.001'))])),
                ('unit_price', models.DecimalField(decimal_places=2, max_digits=12, validators=[MinValueValidator(Decimal('0.00'))])),
                ('total_price', models.DecimalField(decimal_places=2, max_digits=12)),
                ('warranty_months', models.PositiveIntegerField(blank=True, null=True)),
                ('notes', models.TextField(blank=True)),
                ('purchase', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='line_items', to='purchases.purchase')),
                ('area', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='line_items', to='homes.area')),
                ('room', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='line_items', to='homes.room')),
                ('tags', models.ManyToManyField(blank=True, db_table='line_item_tags', related_name='line_items', to='taxonomy.tag')),
            ],
            options={
                'db_table': 'purchase_line_items',
                'ordering': ['position', 'created_at'],
                'indexes': [
                    models.Index(fields=['area'], name='line_items_area_idx'),
                    models.Index(fields=['room'], name='line_items_room_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Attachment',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('file_url', models.URLField(max_length=1000)),
                ('thumbnail_url', models.URLField(blank=True, max_length=1000)),
                ('file_name', models.CharField(max_length=255)),
                ('file_type', models.CharField(choices=FILE_TYPES, max_length=20)),
                ('file_size_bytes', models.PositiveBigIntegerField(blank=True, null=True)),
                ('ai_extracted_data', models.JSONField(blank=True, null=True)),
                ('house_document_type', models.CharField(blank=True, choices=HOUSE_DOCUMENT_TYPES, max_length=30, null=True)),
                ('document_title', models.CharField(blank=True, max_length=255)),
                ('document_description', models.TextField(blank=True)),
                ('expires_at', models.DateTimeField(blank=True, null=True)),
                ('purchase', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='attachments', to='purchases.purchase')),
                ('line_item', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='attachments', to='purchases.purchaselineitem')),
                ('room', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='attachments', to='homes.room')),
            ],
            options={
                'db_table': 'attachments',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['house_document_type', 'expires_at'], name='attachments_doc_expiry_idx'),
                ],
            },
        ),
    ]
