# Additive patch: room assignment and functional/mental status columns
# were introduced after residents were already being recorded.

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('facility', '0001_initial'),
    ]

    operations = [
        migrations.AddField(
            model_name='resident',
            name='room',
            field=models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='residents', to='facility.room'),
        ),
        migrations.AddField(
            model_name='resident',
            name='functional_walking',
            field=models.CharField(default='Mandiri', max_length=50),
        ),
        migrations.AddField(
            model_name='resident',
            name='functional_eating',
            field=models.CharField(default='Mandiri', max_length=50),
        ),
        migrations.AddField(
            model_name='resident',
            name='mental_emotion',
            field=models.CharField(default='Stabil', max_length=50),
        ),
        migrations.AddField(
            model_name='resident',
            name='mental_consciousness',
            field=models.CharField(default='Compos Mentis', max_length=50),
        ),
        migrations.AddIndex(
            model_name='healthrecord',
            index=models.Index(fields=['resident', 'record_type', 'recorded_date'], name='health_resident_type_date_idx'),
        ),
    ]
