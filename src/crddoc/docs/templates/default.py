"""📄 Default Template - Markdown API reference for one API group.

Sections:
- Overview from the package doc
- Index of resources and sub-objects
- Per resource: description, field table, example YAML
- Per sub-object: description, field table, "appears in" list
"""

DEFAULT_TEMPLATE = """\
# {{ group.group_version.api_version }} API Reference
{% if group.doc.sanitized %}

{{ group.doc.sanitized }}
{% endif %}

{% if group.crs %}
## Resources

{% for cr in group.crs %}
* [{{ cr.kind }}](#{{ cr.kind | anchor }})
{% endfor %}
{% endif %}
{% if group.sub_objects %}

## Sub Resources

{% for obj in group.sub_objects %}
* [{{ obj.name }}](#{{ obj.name | anchor }})
{% endfor %}
{% endif %}
{% for cr in group.crs %}

### {{ cr.kind }}
{% if cr.doc.sanitized %}

{{ cr.doc.sanitized }}
{% endif %}

**Scope:** {{ cr.scope }}

| Field | Description | Scheme | Required |
| ----- | ----------- | ------ | -------- |
{% for field in cr.fields %}
| {{ field.name }} | {{ field.doc.sanitized | table_cell }} | {{ field | type_link(group) }} | {{ field.is_required | lower }} |
{% endfor %}

**Example**

```yaml
{{ cr.example_yaml | trim }}
```

[Back to Group](#{{ group.group_version.api_version | anchor }}-api-reference)
{% endfor %}
{% for obj in group.sub_objects %}

### {{ obj.name }}
{% if obj.doc.sanitized %}

{{ obj.doc.sanitized }}
{% endif %}

| Field | Description | Scheme | Required |
| ----- | ----------- | ------ | -------- |
{% for field in obj.fields %}
| {{ field.name }} | {{ field.doc.sanitized | table_cell }} | {{ field | type_link(group) }} | {{ field.is_required | lower }} |
{% endfor %}
{% if obj.parents %}

**Appears in:** {% for parent in obj.parents | unique %}[{{ parent }}](#{{ parent | anchor }}){% if not loop.last %}, {% endif %}{% endfor %}

{% endif %}

[Back to Group](#{{ group.group_version.api_version | anchor }}-api-reference)
{% endfor %}
"""
