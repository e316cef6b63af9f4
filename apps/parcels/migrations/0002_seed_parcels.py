# Generated manually to load the parcel catalog
from django.db import migrations


def seed_parcels(apps, schema_editor):
    """Insert every catalog parcel that is not in the table yet."""
    from apps.parcels.catalog import generate_all_parcels

    Parcel = apps.get_model('parcels', 'Parcel')

    existing = set(Parcel.objects.values_list('id', flat=True))
    Parcel.objects.bulk_create(
        [
            Parcel(
                id=spec.id,
                type=spec.type,
                price_cents=spec.price_cents,
                row=spec.row,
                col=spec.col,
                goal_side=spec.goal_side or '',
                goal_position=spec.goal_position,
            )
            for spec in generate_all_parcels()
            if spec.id not in existing
        ],
        batch_size=500,
    )


def unseed_parcels(apps, schema_editor):
    Parcel = apps.get_model('parcels', 'Parcel')
    Parcel.objects.all().delete()


class Migration(migrations.Migration):

    dependencies = [
        ('parcels', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(seed_parcels, unseed_parcels),
    ]
