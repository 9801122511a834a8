"""
Organizations application.

Organization profiles linked from User, and opportunity mentor
assignments that grant volunteers group-management rights.

Models:
    OrganizationProfile: Public profile of an organization account
    OpportunityMentor: Volunteer assigned as mentor for an opportunity

Services:
    MentorAssignmentService: Assign/revoke mentors, mentor lookups
"""
