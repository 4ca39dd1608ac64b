from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Profile',
            fields=[
                ('owner', models.CharField(max_length=64, primary_key=True, serialize=False)),
                ('name', models.CharField(blank=True, default='', max_length=255)),
                ('section', models.CharField(blank=True, default='', max_length=255)),
                ('school', models.CharField(blank=True, default='', max_length=255)),
                ('avatar_path', models.CharField(blank=True, default='', help_text='Storage path: {owner}/profile/avatar.jpg', max_length=1024)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Profile',
                'verbose_name_plural': 'Profiles',
                'db_table': 'profiles',
            },
        ),
    ]
