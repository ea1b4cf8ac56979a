from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import models


class ProjectPatent(models.Model):
    TYPE_CHOICES = [
        ('UTILITY', 'Utility'),
        ('DESIGN', 'Design'),
        ('PLANT', 'Plant'),
        ('PROVISIONAL', 'Provisional'),
    ]
    STATUS_CHOICES = [
        ('FILED', 'Filed'),
        ('PENDING', 'Pending'),
        ('EXAMINED', 'Examined'),
        ('GRANTED', 'Granted'),
        ('ABANDONED', 'Abandoned'),
    ]

    project = models.ForeignKey('projects.ResearchProject', on_delete=models.SET_NULL, null=True, blank=True,
                                related_name='patents')
    title = models.CharField(max_length=200)
    abstract = models.TextField(blank=True)
    patent_number = models.CharField(max_length=50, unique=True)
    type = models.CharField(max_length=20, choices=TYPE_CHOICES, default='UTILITY')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='FILED')
    inventors = models.TextField(blank=True)
    assignee = models.CharField(max_length=200, blank=True)
    patent_office = models.CharField(max_length=100, blank=True)
    filing_date = models.DateField(null=True, blank=True)
    publication_date = models.DateField(null=True, blank=True)
    grant_date = models.DateField(null=True, blank=True)
    priority_date = models.DateField(null=True, blank=True)
    licensing_status = models.CharField(max_length=100, blank=True)
    revenue_generated = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'),
                                            validators=[MinValueValidator(Decimal('0.00'))])
    ipc_class = models.CharField(max_length=50, blank=True)
    cpc_class = models.CharField(max_length=50, blank=True)
    claims = models.TextField(blank=True)
    url = models.URLField(max_length=500, blank=True)
    commercialization_status = models.CharField(max_length=100, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'project_patents'
        ordering = ['-filing_date', '-id']

    def __str__(self):
        return f"{self.patent_number} - {self.title}"


class ProjectPublication(models.Model):
    TYPE_CHOICES = [
        ('JOURNAL_ARTICLE', 'Journal Article'),
        ('CONFERENCE_PAPER', 'Conference Paper'),
        ('BOOK_CHAPTER', 'Book Chapter'),
        ('TECHNICAL_REPORT', 'Technical Report'),
        ('THESIS', 'Thesis'),
    ]
    STATUS_CHOICES = [
        ('DRAFT', 'Draft'),
        ('SUBMITTED', 'Submitted'),
        ('UNDER_REVIEW', 'Under Review'),
        ('ACCEPTED', 'Accepted'),
        ('PUBLISHED', 'Published'),
        ('REJECTED', 'Rejected'),
    ]
    OPEN_ACCESS_CHOICES = [
        ('YES', 'Yes'),
        ('NO', 'No'),
        ('EMBARGO', 'Embargo'),
    ]

    project = models.ForeignKey('projects.ResearchProject', on_delete=models.CASCADE, related_name='publications')
    title = models.CharField(max_length=300)
    abstract = models.TextField(blank=True)
    type = models.CharField(max_length=30, choices=TYPE_CHOICES, default='JOURNAL_ARTICLE')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='DRAFT')
    journal_name = models.CharField(max_length=200, blank=True)
    conference_name = models.CharField(max_length=200, blank=True)
    authors = models.TextField(blank=True)
    corresponding_author = models.CharField(max_length=200, blank=True)
    doi = models.CharField(max_length=100, blank=True)
    issn = models.CharField(max_length=20, blank=True)
    isbn = models.CharField(max_length=20, blank=True)
    volume = models.CharField(max_length=20, blank=True)
    issue = models.CharField(max_length=20, blank=True)
    pages = models.CharField(max_length=20, blank=True)
    year = models.PositiveSmallIntegerField(null=True, blank=True)
    publisher = models.CharField(max_length=200, blank=True)
    url = models.URLField(max_length=500, blank=True)
    keywords = models.CharField(max_length=500, blank=True)
    submission_date = models.DateField(null=True, blank=True)
    acceptance_date = models.DateField(null=True, blank=True)
    publication_date = models.DateField(null=True, blank=True)
    impact_factor = models.DecimalField(max_digits=6, decimal_places=3, null=True, blank=True)
    citations = models.PositiveIntegerField(default=0)
    open_access = models.CharField(max_length=10, choices=OPEN_ACCESS_CHOICES, default='NO')
    license = models.CharField(max_length=100, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'project_publications'
        ordering = ['-year', '-created_at', '-id']

    def __str__(self):
        return self.title
