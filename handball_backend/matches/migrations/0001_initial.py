import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('players', '0001_initial'),
        ('teams', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Match',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateTimeField()),
                ('home_score', models.PositiveIntegerField(default=0)),
                ('away_score', models.PositiveIntegerField(default=0)),
                ('status', models.CharField(choices=[('PENDING', 'Pending'), ('IN_PROGRESS', 'In progress'), ('COMPLETED', 'Completed')], default='PENDING', max_length=12)),
                ('real_time_first_half_start', models.BigIntegerField(blank=True, null=True)),
                ('real_time_first_half_end', models.BigIntegerField(blank=True, null=True)),
                ('real_time_second_half_start', models.BigIntegerField(blank=True, null=True)),
                ('real_time_second_half_end', models.BigIntegerField(blank=True, null=True)),
                ('video_url', models.URLField(blank=True, max_length=500, null=True)),
                ('first_half_video_start', models.PositiveIntegerField(blank=True, null=True)),
                ('second_half_video_start', models.PositiveIntegerField(blank=True, null=True)),
                ('home_events_locked', models.BooleanField(default=False)),
                ('away_events_locked', models.BooleanField(default=False)),
                ('away_team', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='away_matches', to='teams.team')),
                ('home_team', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='home_matches', to='teams.team')),
            ],
            options={
                'ordering': ['-date', '-id'],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('home_team', models.F('away_team')), _negated=True), name='match_home_neq_away'),
                ],
            },
        ),
        migrations.CreateModel(
            name='GameEvent',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('type', models.CharField(choices=[('Shot', 'Shot'), ('Turnover', 'Turnover'), ('Sanction', 'Sanction')], max_length=10)),
                ('subtype', models.CharField(blank=True, default='', max_length=20)),
                ('position', models.CharField(blank=True, choices=[('LW', 'Left wing'), ('LB', 'Left back'), ('CB', 'Centre back'), ('RB', 'Right back'), ('RW', 'Right wing')], max_length=5, null=True)),
                ('distance', models.CharField(blank=True, choices=[('6M', '6 m'), ('9M', '9 m'), ('7M', '7 m (penalty)')], max_length=3, null=True)),
                ('zone', models.CharField(blank=True, editable=False, max_length=8, null=True)),
                ('goal_zone', models.CharField(blank=True, choices=[('TL', 'Top left'), ('TM', 'Top middle'), ('TR', 'Top right'), ('ML', 'Middle left'), ('MM', 'Middle'), ('MR', 'Middle right'), ('BL', 'Bottom left'), ('BM', 'Bottom middle'), ('BR', 'Bottom right')], max_length=2, null=True)),
                ('sanction_type', models.CharField(blank=True, max_length=20, null=True)),
                ('is_collective', models.BooleanField(default=False)),
                ('has_opposition', models.BooleanField(default=False)),
                ('is_counter_attack', models.BooleanField(default=False)),
                ('timestamp', models.PositiveIntegerField()),
                ('video_timestamp', models.PositiveIntegerField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('active_goalkeeper', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='goalkeeper_events', to='players.player')),
                ('match', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='events', to='matches.match')),
                ('player', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='events', to='players.player')),
                ('team', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='events', to='teams.team')),
            ],
            options={
                'ordering': ['timestamp', 'id'],
                'indexes': [models.Index(fields=['match', 'timestamp'], name='event_match_ts_idx')],
            },
        ),
    ]
