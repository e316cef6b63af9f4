# Generated manually for the parcels app

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Parcel',
            fields=[
                ('id', models.CharField(max_length=32, primary_key=True, serialize=False)),
                ('type', models.CharField(choices=[('goal', 'Tor-Parzelle'), ('penalty', 'Elfmeterpunkt'), ('kickoff', 'Anstoßpunkt'), ('field', 'Feld-Parzelle')], max_length=16)),
                ('price_cents', models.PositiveIntegerField()),
                ('row', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('col', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('goal_side', models.CharField(blank=True, choices=[('left', 'Links'), ('right', 'Rechts')], max_length=8)),
                ('goal_position', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'parcels',
                'ordering': ['type', 'row', 'col', 'id'],
                'indexes': [models.Index(fields=['type'], name='parcels_type_idx')],
            },
        ),
    ]
