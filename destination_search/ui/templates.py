LOADING_TEMPLATE = """
<div class="loading-state">
  <div class="loading-spinner"></div>
  <p>Searching for the best destinations...</p>
</div>
"""

RESULTS_TEMPLATE = """
<div class="cities-recommendation">
{% for result in results %}
  <div class="recommendation-card">
    <img src="{{ result.record.image_or(placeholder_image) }}" alt="{{ result.record.name }}" onerror="this.src='{{ placeholder_image }}'">
    <div class="recommendation-card-content">
      <h3>{{ result.record.name }}</h3>
      <p class="score">Match: {{ result.percent }}%</p>
      <p>{{ result.record.description or placeholder_description }}</p>
    </div>
  </div>
{% endfor %}
</div>
"""

EMPTY_TEMPLATE = """
<p class="empty">No destinations found</p>
"""

ERROR_TEMPLATE = """
<div class="error-state">
  <p>{{ message }}</p>
</div>
"""

TEMPLATES = {
    "loading.html": LOADING_TEMPLATE,
    "results.html": RESULTS_TEMPLATE,
    "empty.html": EMPTY_TEMPLATE,
    "error.html": ERROR_TEMPLATE,
}
