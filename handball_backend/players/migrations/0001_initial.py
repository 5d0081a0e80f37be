import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Player',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=120)),
                ('number', models.PositiveSmallIntegerField(validators=[django.core.validators.MaxValueValidator(99)])),
                ('handedness', models.CharField(choices=[('LEFT', 'Left'), ('RIGHT', 'Right')], default='RIGHT', max_length=5)),
                ('is_goalkeeper', models.BooleanField(default=False)),
            ],
            options={
                'ordering': ['name', 'id'],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(number__lte=99), name='player_number_lte_99'),
                ],
            },
        ),
    ]
