import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Subject',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('owner', models.CharField(db_index=True, max_length=64)),
                ('title', models.CharField(max_length=255)),
                ('icon', models.CharField(blank=True, default='', max_length=16)),
                ('sort_order', models.IntegerField(default=1, help_text='Display position, ascending')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'Subject',
                'verbose_name_plural': 'Subjects',
                'db_table': 'subjects',
                'ordering': ['sort_order', 'id'],
                'indexes': [models.Index(fields=['owner', 'sort_order'], name='subjects_owner_sort_idx')],
            },
        ),
        migrations.CreateModel(
            name='File',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('owner', models.CharField(db_index=True, max_length=64)),
                ('category', models.CharField(choices=[('performance', 'Performance'), ('written', 'Written')], max_length=16)),
                ('title', models.CharField(max_length=255)),
                ('object_path', models.CharField(help_text='Storage path: {owner}/subjects/{subject}/{category}/{token}-{name}', max_length=1024, unique=True)),
                ('mime_type', models.CharField(blank=True, default='', help_text='MIME type as reported by the client', max_length=255)),
                ('size_bytes', models.BigIntegerField(default=0, help_text='File size in bytes')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('subject', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='files', to='portfolio.subject')),
            ],
            options={
                'verbose_name': 'File',
                'verbose_name_plural': 'Files',
                'db_table': 'files',
                'ordering': ['-created_at', '-id'],
                'indexes': [models.Index(fields=['owner', 'subject', 'category', '-created_at'], name='files_owner_folder_idx')],
            },
        ),
    ]
